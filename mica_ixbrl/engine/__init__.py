# Path: mica_ixbrl/engine/__init__.py
"""
MiCA iXBRL Engine

Validation rule engines (checks/), iXBRL generation (generator/), the
taxonomy index, the validation orchestrator and the document generator.

Import from the submodules directly, e.g.:
    from mica_ixbrl.engine.orchestrator import validate_whitepaper
    from mica_ixbrl.engine.document_generator import generate_document
"""

# Path: mica_ixbrl/engine/generator/__init__.py
"""
iXBRL Generation Components

- numeric_grammar: which values may be tagged as ix:nonFraction
- fact_builder: record to facts and units
- context_builder: instant, duration and dimensional contexts
- inline_tagger: facts to ix:nonNumeric / ix:nonFraction markup
- css_styles: inline stylesheet
- language_support: document languages and section titles
"""

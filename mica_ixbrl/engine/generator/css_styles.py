# Path: mica_ixbrl/engine/generator/css_styles.py
"""
Document Styles

Stylesheet embedded in the generated iXBRL document. The document must
be self-contained, so the CSS is inlined in a <style> element rather
than linked.

The stylesheet must stay free of '<' and '&' so it can sit in XHTML
without a CDATA section.
"""

STYLESHEET = """
* { margin: 0; padding: 0; box-sizing: border-box; }
html { font-size: 10pt; }
body {
  font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
  line-height: 1.5;
  color: #1a1a1a;
  background: #f0f0f0;
}
.page {
  width: 210mm;
  min-height: 297mm;
  margin: 10mm auto;
  padding: 20mm 25mm;
  background: #ffffff;
  box-shadow: 0 1px 4px rgba(0, 0, 0, 0.15);
  page-break-after: always;
}
@media print {
  body { background: #ffffff; }
  .page { margin: 0; padding: 15mm 20mm; box-shadow: none; }
}
.cover-page { text-align: center; padding-top: 60mm; }
.cover-page .title { font-size: 22pt; font-weight: 700; color: #003366; margin-bottom: 5mm; }
.cover-page .subtitle { font-size: 14pt; color: #666666; margin-bottom: 10mm; }
.cover-page .meta { font-size: 10pt; color: #888888; margin-top: 5mm; }
.section-heading {
  font-size: 14pt;
  font-weight: 700;
  color: #003366;
  margin: 8mm 0 5mm 0;
  padding-bottom: 2mm;
  border-bottom: 2px solid #003366;
}
table.accounts { width: 100%; border-collapse: collapse; margin: 3mm 0 5mm 0; font-size: 9pt; }
table.accounts th {
  background: #003366;
  color: #ffffff;
  font-weight: 600;
  padding: 3mm 4mm;
  text-align: left;
  font-size: 8pt;
  text-transform: uppercase;
}
table.accounts td { padding: 2.5mm 4mm; border: 0.5pt solid #cccccc; vertical-align: top; }
table.accounts td.field-number { width: 12mm; font-weight: 600; color: #003366; text-align: center; }
table.accounts td.field-label { width: 55mm; color: #444444; font-size: 8.5pt; }
table.accounts td.field-value { overflow-wrap: break-word; }
table.accounts tr:nth-child(even) { background: #f8f9fa; }
table.accounts .text-block { white-space: pre-wrap; line-height: 1.6; }
.hidden-header { display: none; }
"""


def generate_stylesheet() -> str:
    """Get the embedded stylesheet."""
    return STYLESHEET


__all__ = ['STYLESHEET', 'generate_stylesheet']

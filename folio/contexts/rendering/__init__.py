"""
Rendering Context

Responsibilities:
- Exports documents to HTML, LaTeX, DOCX and PDF through the template factory
- Writes DOCX (python-docx) and PDF (reportlab) from a shared document outline
- Compiles LaTeX to PDF when the latex PDF engine is selected
- Checks that exported PDFs keep their text extractable

Owns: Binary writers, LaTeX compilation, export orchestration and output files
Never: Decides template content or styling
"""

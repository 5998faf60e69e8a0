"""
Templating Context

Responsibilities:
- Defines the resume and cover-letter data model
- Manages template customization (colors, fonts, spacing, layout) and presets
- Registers template implementations per document kind and hands out instances
- Renders HTML and LaTeX through Jinja2 templates
- Validates document data against a template and checks structural ATS fitness

Owns: Document data model, template metadata and customization, Jinja2 template system
Never: Writes files or compiles LaTeX (rendering context does that)
"""

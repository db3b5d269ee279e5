"""
page-digest web layer.

Modules
───────
app  — Flask JSON API around the summarisation pipeline
"""

"""
page-digest command-line client.

Modules
───────
cli  — argparse front end: summarise via the server, manage local history
"""

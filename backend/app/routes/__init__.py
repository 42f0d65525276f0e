# Routes package init
"""
Notas Backend - Routes Package
===============================

Route Inventory:
    - notes.py:  GET /, GET|POST /adicionar_nota, GET /apagar_notas, GET /ler

Routes stay thin: they read the access policy context, call NoteService for
mutations, and render a template or redirect. Errors are raised and turned
into responses by the handlers registered in main.py.
"""

"""NiceGUI interface - thin presentation layer over the notebook API.

Responsibilities:
    - PDF upload area
    - Embedded PDF viewer following the current page
    - Chat with clickable page citations

Delegates state to NotebookSession and all operations to the API.
"""

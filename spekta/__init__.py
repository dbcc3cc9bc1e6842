"""
spekta — apply LLM SEARCH/REPLACE edits to files, safely.

Public API for library usage::

    from spekta import replace_in_file

    report = replace_in_file("src/app.py", llm_response)
"""

from .api import replace_in_file
from .editing import ReplaceReport, PatchError
from .security import AccessDeniedError

__all__ = ["replace_in_file", "ReplaceReport", "PatchError", "AccessDeniedError"]

"""
project_report_core package

Exposes the two request handlers so the function folders can simply:

    from project_report_core import handle_report_request
"""

from importlib import import_module

# Lazy-import to keep package initialization fast
process_mod = import_module(".process_report", package=__name__)
handle_report_request = process_mod.handle_report_request
handle_storage_report_request = process_mod.handle_storage_report_request
run_report = process_mod.run_report

__all__ = ["handle_report_request", "handle_storage_report_request", "run_report"]

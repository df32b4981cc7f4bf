"""ServiceResult formatting — Rich for humans, JSON for machines.

``format_result`` picks the mode from :class:`OutputSettings`:
``--json`` wins over ``--quiet``, which wins over the Rich renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from linkstrength.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from linkstrength.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags, frozen."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)

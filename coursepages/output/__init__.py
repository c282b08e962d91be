"""Output classes turning course sections into Jinja template contexts."""

from .collapse import is_section_collapsed
from .models import Templatable, TemplateContext
from .renderer import TemplateRenderer
from .section import SectionOutput
from .section_parts import (
    AvailabilityOutput,
    CmListOutput,
    CmSummaryOutput,
    ControlMenuOutput,
    HeaderOutput,
    SectionPart,
    SummaryOutput,
    VisibilityOutput,
)

__all__ = [
    "AvailabilityOutput",
    "CmListOutput",
    "CmSummaryOutput",
    "ControlMenuOutput",
    "HeaderOutput",
    "SectionOutput",
    "SectionPart",
    "SummaryOutput",
    "Templatable",
    "TemplateContext",
    "TemplateRenderer",
    "is_section_collapsed",
]

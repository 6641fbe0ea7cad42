"""Element records and the component dispatcher."""

from __future__ import annotations

from .dispatch import EXTRACTORS, extract_element
from .models import Component, WebElement, WebImage

__all__ = ["EXTRACTORS", "Component", "WebElement", "WebImage", "extract_element"]

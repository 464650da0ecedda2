"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import re
from typing import Any

from vultr_cli.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?(?:bold|dim|red|green|yellow|cyan)(?: [a-z]+)*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stdout."""
	console_class = _load_rich_console_class()
	return console_class(soft_wrap=True)


def strip_markup(text: str) -> str:
	"""Remove the style tags this package emits from *text*."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object, markup: bool = True) -> None:
		"""Render with Rich when available, else plain stdout print.

		Pass ``markup=False`` for text that contains user or API data.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			if markup:
				objects = tuple(
					strip_markup(obj) if isinstance(obj, str) else obj for obj in objects
				)
			print(*objects)
			return
		rich_console.print(*objects, markup=markup, highlight=False)


console = _ConsoleProxy()

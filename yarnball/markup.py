"""
Odds and ends for getting text in and out of HTML.
"""
import codecs
from html.entities import name2codepoint
from typing import Iterable, Optional, Union

import regex

from .diagnostics import EvaluationError

_SPECIAL = regex.compile(r"&(?:(?P<name>[A-Za-z][A-Za-z0-9]*)|#(?P<dec>[0-9]+)|#[xX](?P<hex>[0-9A-Fa-f]+));|[&<>]")
_ESCAPE = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}

def _is_entity(m) -> bool:
	if m.group("name"):
		return m.group("name") in name2codepoint
	digits = m.group("dec") or m.group("hex")
	if digits is None:
		return False
	return int(digits, 10 if m.group("dec") else 16) <= 0x10FFFF

def html_special_chars(text:str, preserve_entities:bool=False, charset:str="UTF-8") -> str:
	"""
	Escape ampersands and angle brackets. Quotes are left alone.

	With preserve_entities, an entity that is already there (like &amp; or
	&#8364;) stays as it is instead of getting encoded a second time.
	Text which the charset cannot represent comes back as the empty string.
	"""
	try: codecs.lookup(charset)
	except LookupError as ex:
		raise EvaluationError("Unknown charset %r" % charset) from ex
	try: text.encode(charset)
	except UnicodeEncodeError:
		return ""
	def escape(m):
		if preserve_entities and _is_entity(m):
			return m.group()
		return _ESCAPE[m.group()[0]] + m.group()[1:]
	return _SPECIAL.sub(escape, text)

_NEWLINE = regex.compile(r"\r\n|\n\r|\n|\r")

def nl2br(text:str) -> str:
	return _NEWLINE.sub(r"<br />\g<0>", text)

_MARKUP = regex.compile(r"""
	<!--.*?(?:-->|\Z)
	| <\?.*?(?:\?>|\Z)
	| <(?!\s)/?(?P<name>[A-Za-z][\w:.-]*)?(?:[^>"']|"[^"]*(?:"|\Z)|'[^']*(?:'|\Z))*(?:>|\Z)
""", regex.VERBOSE | regex.DOTALL)
_TAG_NAME = regex.compile(r"<\s*([A-Za-z][\w:.-]*)")

def _allowed_names(allowable_tags:Union[str, Iterable[str], None]) -> frozenset:
	if allowable_tags is None:
		return frozenset()
	if isinstance(allowable_tags, str):
		return frozenset(name.lower() for name in _TAG_NAME.findall(allowable_tags))
	return frozenset(name.strip("<>/ ").lower() for name in allowable_tags)

def strip_tags(text:str, allowable_tags:Optional[Union[str, Iterable[str]]]=None) -> str:
	"""
	Remove tags, comments and processing instructions.
	Tags named in allowable_tags (given as "<a><em>" or as ["a", "em"]) survive.
	"""
	allowed = _allowed_names(allowable_tags)
	def strip(m):
		name = m.group("name")
		return m.group() if name and name.lower() in allowed else ""
	return _MARKUP.sub(strip, text)

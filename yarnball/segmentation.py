"""
Word and sentence boundaries, so that text can be cropped somewhere sensible.

A boundary is an offset (in code points) between two characters where a
reader would accept a break. Offsets zero and len(text) are always boundaries.

Word boundaries are the Unicode default word boundaries, as the regex
engine computes them in WORD mode. Sentence boundaries get worked out here
along the lines of the UAX #29 sentence rules: a run of terminators, then
any closing punctuation, then any spaces, then perhaps one paragraph
separator. That is a break, unless the terminator is a full stop which
looks like part of a number ("3.14"), an abbreviation ("U.S.A."), or is
followed by a lower-case continuation ("e.g. the").
"""
from bisect import bisect_left, bisect_right
from typing import Union

import regex

from .diagnostics import SegmentationError

WORD = "word"
SENTENCE = "sentence"

_WORD_BOUNDARY = regex.compile(r"\b", regex.WORD)

_PARA_SEP = r"\r\n|[\n\r\x85\u2028\u2029]"
_TERMINATOR = r"[\p{Sentence_Break=ATerm}\p{Sentence_Break=STerm}]"

_SENTENCE_END = regex.compile(
	r"(?P<term>" + _TERMINATOR + r"+)"
	r"(?P<close>\p{Sentence_Break=Close}*)"
	r"(?P<sp>[^\S\n\r\x85\u2028\u2029]*)"
	r"(?P<sep>" + _PARA_SEP + r")?"
)
_PARAGRAPH = regex.compile(_PARA_SEP)
_FULL_STOP = regex.compile(r"\p{Sentence_Break=ATerm}")
_NUMERIC = regex.compile(r"\p{Nd}")
_CASED = regex.compile(r"[\p{Lu}\p{Lt}\p{Ll}]")
_UPPER = regex.compile(r"[\p{Lu}\p{Lt}]")
_LOWER_AHEAD = regex.compile(r"[^\p{L}\n\r\x85\u2028\u2029" + _TERMINATOR[1:-1] + r"]*\p{Ll}")
_CONTINUES = regex.compile(r"[\p{Sentence_Break=SContinue}" + _TERMINATOR[1:-1] + r"]")


def _as_text(text) -> str:
	if isinstance(text, bytes):
		try: return text.decode("utf-8")
		except UnicodeDecodeError as ex:
			raise SegmentationError("Text is not valid UTF-8: %s" % ex) from ex
	if not isinstance(text, str):
		raise SegmentationError("Cannot segment a %s" % type(text).__name__)
	try: text.encode("utf-8")
	except UnicodeEncodeError as ex:
		raise SegmentationError("Text contains unpaired surrogates: %s" % ex) from ex
	return text

def word_boundaries(text:str) -> list[int]:
	found = {0, len(text)}
	found.update(m.start() for m in _WORD_BOUNDARY.finditer(text))
	return sorted(found)

def sentence_boundaries(text:str) -> list[int]:
	size = len(text)
	found = {0, size}
	for m in _SENTENCE_END.finditer(text):
		if m.end() < size and (m.group("sep") or _breaks_after(text, m)):
			found.add(m.end())
	found.update(m.end() for m in _PARAGRAPH.finditer(text))
	return sorted(found)

def _breaks_after(text:str, m) -> bool:
	term, close, sp = m.group("term", "close", "sp")
	after = m.end()
	if _FULL_STOP.fullmatch(term[-1]):
		if not (close or sp):
			if _NUMERIC.match(text, after):
				return False
			if len(term) == 1 and m.start() and _CASED.match(text, m.start()-1) and _UPPER.match(text, after):
				return False
		if _LOWER_AHEAD.match(text, after):
			return False
	return not _CONTINUES.match(text, after)

_BREAKERS = {
	WORD: word_boundaries,
	SENTENCE: sentence_boundaries,
}

class BoundaryIterator:
	"""
	Holds the boundaries of one kind within one text, in order.
	Mainly it answers the question "Where is the last break before here?"
	"""

	def __init__(self, text:Union[str, bytes], kind:str=WORD):
		if kind not in _BREAKERS:
			raise ValueError("No such kind of boundary: %r" % kind)
		self.text = _as_text(text)
		self.kind = kind
		self.boundaries = tuple(_BREAKERS[kind](self.text))

	def __iter__(self):
		return iter(self.boundaries)

	def __len__(self):
		return len(self.boundaries)

	def is_boundary(self, offset:int) -> bool:
		i = bisect_left(self.boundaries, offset)
		return i < len(self.boundaries) and self.boundaries[i] == offset

	def preceding(self, offset:int) -> int:
		""" The last boundary strictly before offset, or zero if there is none. """
		i = bisect_left(self.boundaries, offset)
		return self.boundaries[i-1] if i else 0

	def following(self, offset:int) -> int:
		""" The first boundary strictly after offset, or the end of the text. """
		i = bisect_right(self.boundaries, offset)
		return self.boundaries[i] if i < len(self.boundaries) else len(self.text)

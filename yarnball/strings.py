"""
The everyday string primitives.

Everything here takes its text as an immutable str and hands back something
new. Offsets and lengths count code points, never bytes; Python's own str
already sees things that way, so most of these are a matter of getting the
edge cases right. The substr/substring pair and the search functions mind
the conventions of JavaScript's String methods, which is what people who
write expressions tend to expect.
"""
from typing import Optional, Sequence, Union

import regex

from .segmentation import BoundaryIterator, WORD, SENTENCE

DEFAULT_TRIM = " \n\r\t\v\0"

###############################################################################
# Extraction

def substr(text:str, start:int, length:Optional[int]=None) -> str:
	"""
	Up to `length` characters, beginning at `start`.
	A negative start counts back from the end.
	"""
	if start < 0:
		start = max(0, len(text) + start)
	if length is None:
		return text[start:]
	return text[start:start + max(0, length)]

def substring(text:str, start:int, end:Optional[int]=None) -> str:
	""" The characters between two indices, in whichever order they come. """
	if end is None:
		end = len(text)
	start, end = sorted((max(0, start), max(0, end)))
	return text[start:end]

def char_at(text:str, index:int) -> str:
	if index < 0:
		return ""
	return text[index:index+1]

def length(text:str) -> int:
	return len(text)

###############################################################################
# Searching

def index_of(text:str, search:str, from_index:int=0) -> int:
	from_index = max(0, from_index)
	if search == "":
		return min(len(text), from_index)
	return text.find(search, from_index)

def last_index_of(text:str, search:str, to_index:Optional[int]=None) -> int:
	""" Searches backward, considering only text before `to_index`. """
	if to_index is None:
		to_index = len(text)
	to_index = max(0, to_index)
	if search == "":
		return min(len(text), to_index)
	return text[:to_index].rfind(search)

def _clamp(position:int, text:str) -> int:
	return min(max(0, position), len(text))

def starts_with(text:str, search:str, position:int=0) -> bool:
	return text.startswith(search, _clamp(position, text))

def ends_with(text:str, search:str, position:Optional[int]=None) -> bool:
	""" Does `search` end exactly at `position` (by default, the end of the text)? """
	end = len(text) if position is None else _clamp(position, text)
	return text[:end].endswith(search)

###############################################################################
# Splitting and replacing

def split(text:str, separator:Optional[str]=None, limit:Optional[int]=None) -> list[str]:
	"""
	Split at each occurrence of a literal separator.

	With no separator, the whole text is the only piece. An empty separator
	splits between every character, and the limit then keeps that many.
	Otherwise a positive limit caps the number of pieces, the last one taking
	whatever text remains; a negative limit drops that many pieces from the end.
	"""
	if separator is None:
		return [text]
	if separator == "":
		pieces = list(text)
		return pieces if limit is None else pieces[:limit]
	if limit is None:
		return text.split(separator)
	if limit < 0:
		return text.split(separator)[:limit]
	return text.split(separator, max(1, limit) - 1)

NEEDLES = Union[None, str, Sequence[Optional[str]]]

def _text(it) -> str:
	return "" if it is None else it

def _replace_one(subject:str, search:NEEDLES, replacement:NEEDLES) -> str:
	subject = _text(subject)
	if search is None or isinstance(search, str):
		if not (replacement is None or isinstance(replacement, str)):
			raise TypeError("A single search string needs a single replacement string")
		pairs = [(_text(search), _text(replacement))]
	elif replacement is None or isinstance(replacement, str):
		pairs = [(_text(s), _text(replacement)) for s in search]
	else:
		replacement = list(replacement)
		pairs = [
			(_text(s), _text(replacement[i]) if i < len(replacement) else "")
			for i, s in enumerate(search)
		]
	for needle, substitute in pairs:
		if needle:
			subject = subject.replace(needle, substitute)
	return subject

def replace(subject, search:NEEDLES, replacement:NEEDLES):
	"""
	Literal (not regular-expression) replacement.

	`search` may be one string or several. Several searches pair up with
	several replacements by position (with blanks for any shortfall), or
	all share one replacement string. The pairs apply one after another.
	If `subject` is a sequence, each element gets the treatment and a list
	comes back. None counts as the empty string throughout.
	"""
	if subject is None or isinstance(subject, str):
		return _replace_one(subject, search, replacement)
	return [_replace_one(each, search, replacement) for each in subject]

###############################################################################
# Case and whitespace

def to_lower_case(text:str) -> str:
	return text.lower()

def to_upper_case(text:str) -> str:
	return text.upper()

def first_letter_to_upper_case(text:str) -> str:
	return text[:1].upper() + text[1:]

def first_letter_to_lower_case(text:str) -> str:
	return text[:1].lower() + text[1:]

def _expand_ranges(characters:str) -> str:
	# "a..f" means the whole range from a to f.
	out, i = [], 0
	while i < len(characters):
		if characters[i+1:i+3] == ".." and i + 3 < len(characters):
			low, high = ord(characters[i]), ord(characters[i+3])
			out.extend(map(chr, range(low, high + 1)))
			i += 4
		else:
			out.append(characters[i])
			i += 1
	return ''.join(out)

def trim(text:str, characters:str=DEFAULT_TRIM) -> str:
	return text.strip(_expand_ranges(characters))

def is_blank(text:str) -> bool:
	return trim(text) == ""

###############################################################################
# Cropping

def crop(text:str, maximum:int, suffix:str="") -> str:
	""" The suffix goes on only if something was cut off, and does not count toward the maximum. """
	if len(text) > maximum:
		return text[:max(0, maximum)] + suffix
	return text

def _crop_at(kind:str, text:Union[str, bytes], maximum:int, suffix:str) -> str:
	boundaries = BoundaryIterator(text, kind)
	text = boundaries.text
	if len(text) <= maximum:
		return text
	return text[:boundaries.preceding(maximum)] + suffix

def crop_at_word(text:str, maximum:int, suffix:str="") -> str:
	""" Like crop, but backs up to the last word boundary before the maximum. """
	return _crop_at(WORD, text, maximum, suffix)

def crop_at_sentence(text:str, maximum:int, suffix:str="") -> str:
	""" Like crop, but backs up to the last sentence boundary before the maximum. """
	return _crop_at(SENTENCE, text, maximum, suffix)

###############################################################################
# Counting

_NOT_WORDY = regex.compile(r"[\p{P}\p{S}\p{Nd}]+")

def word_count(text:str) -> int:
	"""
	A rough count of words, good enough for estimating reading time:
	Punctuation, symbols and digits go away, then whitespace separates words.
	"""
	return len(_NOT_WORDY.sub("", text).split())

"""
Loose conversions between strings and other primitive values.

Expressions tend to receive numbers as text, from attributes and request
parameters and such. Asking politely for a number should never blow up:
a string gets read for as long as it looks numeric, and whatever follows
gets ignored. A string with no numeric prefix at all reads as zero.
"""
import math
import regex

_NUMERIC_PREFIX = regex.compile(r"[ \t\n\r\v\f]*(?P<number>[+-]?(?:\d+(?P<fraction>\.\d*)?|(?P<bare>\.\d+))(?P<exponent>[eE][+-]?\d+)?)")

def to_float(text:str) -> float:
	m = _NUMERIC_PREFIX.match(text)
	return float(m.group("number")) if m else 0.0

def to_integer(text:str) -> int:
	""" Truncates toward zero. Plain digit strings convert exactly, however long. """
	m = _NUMERIC_PREFIX.match(text)
	if m is None:
		return 0
	if not any(m.group("fraction", "bare", "exponent")):
		return int(m.group("number"))
	value = float(m.group("number"))
	return int(value) if math.isfinite(value) else 0

def to_boolean(text:str) -> bool:
	""" True for "true" in any letter case, or for anything that reads as the integer one. """
	return text.lower() == "true" or to_integer(text) == 1

def to_string(value) -> str:
	if value is None or value is False:
		return ""
	if value is True:
		return "1"
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value)

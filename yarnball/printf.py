"""
printf-style formatting, after the fashion of C with a few well-known extensions:

    %[argnum$][flags][width][.precision]specifier

argnum picks an argument by (one-based) position rather than in sequence.
Flags are any of: - (justify left), + (always show a sign), 0 or space
(the padding character), or 'c (pad with the character c).
Specifiers are b c d e E f F g G o s u x X, and %% is a percent sign.

Arguments get coerced the same loose way as everywhere else, so "12 apples"
is perfectly good for %d. Running out of arguments, or using a specifier
not in the list above, is a FormatError.
"""
import math
from typing import Any, NamedTuple, Optional, Sequence

import regex

from .codec import single_byte
from .coercion import to_integer, to_float, to_string
from .diagnostics import FormatError

_DIRECTIVE = regex.compile(
	r"%(?:(?P<argnum>\d+)\$)?(?P<flags>(?:[-+ 0]|'.)*)(?P<width>\d+)?(?:\.(?P<precision>\d+))?(?P<specifier>.)?",
	regex.DOTALL,
)
_EXPONENT = regex.compile(r"e([+-])0*(\d)")
_UNSIGNED = 1 << 64

class Directive(NamedTuple):
	left: bool
	plus: bool
	pad: str
	width: int
	precision: Optional[int]
	specifier: str

def _directive(m) -> Directive:
	left, plus, pad = False, False, " "
	flags, i = m.group("flags"), 0
	while i < len(flags):
		ch = flags[i]
		if ch == "'":
			pad = flags[i+1]
			i += 2
			continue
		if ch == "-": left = True
		elif ch == "+": plus = True
		else: pad = ch
		i += 1
	precision = m.group("precision")
	return Directive(left, plus, pad, int(m.group("width") or 0), None if precision is None else int(precision), m.group("specifier"))

def _integer(value:Any) -> int:
	if isinstance(value, (bool, int)):
		return int(value)
	if isinstance(value, float):
		return int(value) if math.isfinite(value) else 0
	return to_integer(to_string(value))

def _float(value:Any) -> float:
	if isinstance(value, (bool, int, float)):
		return float(value)
	return to_float(to_string(value))

def _exponent(text:str) -> str:
	# 1.5e+03 is written 1.5e+3 here.
	return _EXPONENT.sub(r"e\1\2", text)

def _pad(d:Directive, sign:str, body:str, numeric:bool) -> str:
	shortfall = d.width - len(sign) - len(body)
	if shortfall <= 0:
		return sign + body
	if d.left:
		return sign + body + (" " if numeric and d.pad == "0" else d.pad) * shortfall
	if numeric and d.pad == "0":
		return sign + "0" * shortfall + body
	return d.pad * shortfall + sign + body

def _render(d:Directive, value:Any) -> str:
	specifier = d.specifier
	if specifier == "s":
		text = to_string(value)
		if d.precision is not None:
			text = text[:d.precision]
		return _pad(d, "", text, False)
	if specifier == "c":
		return single_byte(_integer(value))
	if specifier in "duboxX":
		n = _integer(value)
		if specifier == "d":
			sign = "-" if n < 0 else "+" if d.plus else ""
			return _pad(d, sign, str(abs(n)), True)
		if n < 0:
			n += _UNSIGNED
		return _pad(d, "", format(n, specifier.replace("u", "d")), True)
	if specifier in "eEfFgG":
		f = _float(value)
		sign = "-" if f < 0 else "+" if d.plus else ""
		precision = 6 if d.precision is None else d.precision
		if specifier in "gG":
			body = _exponent("%.*g" % (max(precision, 1), abs(f)))
		elif specifier in "eE":
			body = _exponent("%.*e" % (precision, abs(f)))
		else:
			body = "%.*f" % (precision, abs(f))
		if specifier.isupper():
			body = body.upper()
		return _pad(d, sign, body, True)
	raise FormatError("Unknown format specifier %r" % specifier)

def sprintf(template:str, args:Sequence[Any]=()) -> str:
	out, pos, sequence = [], 0, 0
	for m in _DIRECTIVE.finditer(template):
		out.append(template[pos:m.start()])
		pos = m.end()
		d = _directive(m)
		if d.specifier is None:
			raise FormatError("Missing format specifier at end of string")
		if d.specifier == "%":
			out.append("%")
			continue
		if m.group("argnum") is not None:
			index = int(m.group("argnum")) - 1
			if index < 0:
				raise FormatError("Argument number must be greater than zero")
		else:
			index = sequence
			sequence += 1
		if index >= len(args):
			raise FormatError("%d arguments are required, %d given" % (index + 2, len(args) + 1))
		out.append(_render(d, args[index]))
	out.append(template[pos:])
	return ''.join(out)

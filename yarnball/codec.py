"""
Digests and transfer encodings.

These all work on bytes underneath, and the bytes of a string are its UTF-8
encoding. Data that is not UTF-8 (say, the result of decoding some base64)
still has to come back as a string, so it rides along using Python's
surrogateescape convention: each stray byte becomes a lone surrogate, and
encoding the string again gives back exactly the original bytes.
"""
import base64, binascii, hashlib
from typing import Optional, Union
from urllib.parse import quote, unquote

import regex

TEXT = Union[str, bytes]

_UNRESERVED = "-_.~"
_NOT_BASE64 = regex.compile(r"[^A-Za-z0-9+/=]")
_BAD_PADDING = regex.compile(r"=[^=]|={3,}")

def as_bytes(text:TEXT) -> bytes:
	if isinstance(text, bytes):
		return text
	return text.encode("utf-8", "surrogateescape")

def as_text(data:bytes) -> str:
	return data.decode("utf-8", "surrogateescape")

def md5(text:TEXT) -> str:
	return hashlib.md5(as_bytes(text)).hexdigest()

def sha1(text:TEXT) -> str:
	return hashlib.sha1(as_bytes(text)).hexdigest()

def base64encode(text:TEXT) -> str:
	return base64.b64encode(as_bytes(text)).decode("ascii")

def base64decode(text:TEXT, strict:bool=False) -> Optional[str]:
	"""
	Lenient by default: anything outside the alphabet gets skipped and missing
	padding is forgiven. In strict mode, such input gives None instead.
	"""
	encoded = as_bytes(text).decode("latin-1")
	if strict:
		if _NOT_BASE64.search(encoded) or _BAD_PADDING.search(encoded):
			return None
		encoded = encoded.rstrip("=")
	else:
		encoded = _NOT_BASE64.sub("", encoded).replace("=", "")
	if len(encoded) % 4 == 1:
		if strict:
			return None
		encoded = encoded[:-1]
	try:
		data = base64.b64decode(encoded + "=" * (-len(encoded) % 4))
	except binascii.Error:
		return None
	return as_text(data)

def raw_url_encode(text:TEXT) -> str:
	""" RFC 3986: Everything but letters, digits and -_.~ gets percent-encoded. """
	return quote(as_bytes(text), safe=_UNRESERVED)

def raw_url_decode(text:str) -> str:
	""" The inverse of raw_url_encode. A plus sign stays a plus sign. """
	return unquote(text, errors="surrogateescape")

def single_byte(code:int) -> str:
	""" The one-byte string for code, taken modulo 256. """
	return as_text(bytes([code % 256]))

def first_byte(text:TEXT) -> int:
	data = as_bytes(text)
	return data[0] if data else 0

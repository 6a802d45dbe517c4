"""
The String helper, as a host expression evaluator sees it.

A helper is a named bundle of native functions. The host looks it up by
name (String), then calls methods on it by name with positional arguments:

	String.substr("Hello, World!", 7, 5)

Which names an untrusted expression may call gets decided once, when the
helper is built, rather than being asked again on every call. For String,
the answer is all of them: nothing in here has side effects.
"""
from functools import partial
from typing import Any, Callable, NamedTuple, Optional

from . import strings, pcre, codec, markup, printf, coercion
from .diagnostics import Report, MethodNotAllowed, EvaluationError
from .space import Space, Layer

class Settings(NamedTuple):
	""" Anything a helper wants to know which is not an argument. """
	charset: str = "UTF-8"
	verbose: int = 0

def string_linkage(settings:Settings) -> dict[str, Callable]:
	""" Helper method names, bound to the functions which implement them """
	return {
		"substr": strings.substr,
		"substring": strings.substring,
		"charAt": strings.char_at,
		"length": strings.length,
		"indexOf": strings.index_of,
		"lastIndexOf": strings.last_index_of,
		"startsWith": strings.starts_with,
		"endsWith": strings.ends_with,
		"split": strings.split,
		"replace": strings.replace,
		"toLowerCase": strings.to_lower_case,
		"toUpperCase": strings.to_upper_case,
		"firstLetterToUpperCase": strings.first_letter_to_upper_case,
		"firstLetterToLowerCase": strings.first_letter_to_lower_case,
		"trim": strings.trim,
		"isBlank": strings.is_blank,
		"crop": strings.crop,
		"cropAtWord": strings.crop_at_word,
		"cropAtSentence": strings.crop_at_sentence,
		"wordCount": strings.word_count,

		"pregMatch": pcre.preg_match,
		"pregMatchAll": pcre.preg_match_all,
		"pregReplace": pcre.preg_replace,
		"pregSplit": pcre.preg_split,

		"md5": codec.md5,
		"sha1": codec.sha1,
		"base64encode": codec.base64encode,
		"base64decode": codec.base64decode,
		"rawUrlEncode": codec.raw_url_encode,
		"rawUrlDecode": codec.raw_url_decode,
		"chr": codec.single_byte,
		"ord": codec.first_byte,

		"htmlSpecialChars": partial(markup.html_special_chars, charset=settings.charset),
		"nl2br": markup.nl2br,
		"stripTags": markup.strip_tags,
		"format": printf.sprintf,

		"toString": coercion.to_string,
		"toInteger": coercion.to_integer,
		"toFloat": coercion.to_float,
		"toBoolean": coercion.to_boolean,
	}

class Helper:
	"""
	A named table of native methods, with its permissions settled up front.
	If no allow-list is given, every linked method is allowed.
	"""
	def __init__(self, name:str, linkage:dict[str, Callable], allowed:Optional[frozenset]=None):
		self.name = name
		self._linkage = dict(linkage)
		self._allowed = frozenset(linkage) if allowed is None else frozenset(allowed) & frozenset(linkage)

	def __repr__(self): return "<Helper %s>" % self.name

	def method_names(self):
		return sorted(self._linkage)

	def allows_call_of_method(self, method_name:str) -> bool:
		return method_name in self._allowed

	def method(self, method_name:str) -> Callable:
		if not self.allows_call_of_method(method_name):
			raise MethodNotAllowed("%s.%s may not be called from an expression" % (self.name, method_name))
		return self._linkage[method_name]

	def call(self, method_name:str, *args) -> Any:
		return self.method(method_name)(*args)

def string_helper(settings:Settings=Settings()) -> Helper:
	return Helper("String", string_linkage(settings))

class Context:
	"""
	What a host evaluator needs from its helpers: mount them by name, find
	them again, and call "Helper.method" with positional arguments.
	Failures get noted in the report, then go right on up to the caller.
	"""
	def __init__(self, report:Report, space:Optional[Space]=None):
		self.report = report
		self._space = Layer() if space is None else space

	def mount(self, helper:Helper, alias:Optional[str]=None) -> Helper:
		name = alias or helper.name
		self.report.info("Mounting", helper, "as", name)
		return self._space.mount(name, helper)

	def helper(self, name:str) -> Helper:
		return self._space.fetch(name)

	def child(self) -> "Context":
		""" A nested scope: helpers mounted there shadow those out here. """
		return Context(self.report, self._space.child())

	def call(self, path:str, *args) -> Any:
		helper_name, _, method_name = path.partition(".")
		self.report.info("Calling", path, args)
		try:
			return self.helper(helper_name).call(method_name, *args)
		except EvaluationError as ex:
			self.report.failed_call(path, ex)
			raise

def default_context(settings:Settings=Settings()) -> Context:
	""" A context with String already mounted, which is what most hosts want """
	context = Context(Report(verbose=settings.verbose))
	context.mount(string_helper(settings))
	return context

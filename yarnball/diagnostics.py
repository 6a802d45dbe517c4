"""
Failure modes, and the means to talk about them.

The string primitives are pure functions, so most of what can go wrong
is a matter of bad arguments. Those become exceptions in the hierarchy
below and go straight back to whoever called. Separately, a host may
want a running commentary on what got mounted and called; that is what
the Report is for.
"""
import sys, random
from typing import Any, Optional

class EvaluationError(Exception):
	""" Something a helper could not evaluate. """

class RegexCompileError(EvaluationError):
	"""
	A delimited pattern failed to make it through the regex engine,
	or never got that far because the delimiters were wrong.
	"""
	def __init__(self, pattern:str, message:str, position:Optional[int]=None):
		self.pattern, self.message, self.position = pattern, message, position
		text = "Error evaluating regular expression %s: %s" % (pattern, message)
		if position is not None:
			text += " (at offset %d)" % position
		super().__init__(text)

	def illustrate(self) -> str:
		""" Point at the trouble spot, compiler-style. """
		lines = [self.pattern]
		if self.position is not None:
			lines.append(' ' * self.position + '^ ' + self.message)
		else:
			lines.append(self.message)
		return '\n'.join(lines)

class SegmentationError(EvaluationError):
	""" The text could not be broken into words or sentences. """

class FormatError(EvaluationError):
	""" A printf-style format string and its arguments disagree. """

class MethodNotAllowed(EvaluationError):
	""" The helper refuses to expose this method to expressions. """

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crikey', 'Drat', 'Fiddlesticks',
		'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
	]
	resignations = [
		'The string came apart in my hands.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues on behalf of a host, and traces when asked to. """

	def __init__(self, *, verbose:int=0, stream=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._stream = stream

	def _out(self):
		# Resolved late, so that redirected stderr gets the text.
		return self._stream or sys.stderr

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return tuple(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=self._out())

	def failed_call(self, name:str, ex:EvaluationError):
		""" Make an entry for a helper call that blew up """
		if isinstance(ex, RegexCompileError):
			self.issue("%s failed:\n%s" % (name, ex.illustrate()))
		else:
			self.issue("%s failed: %s" % (name, ex))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		out = self._out()
		if self._issues:
			print("*"*60, file=out)
			print(_outburst(), file=out)
		for i in self._issues:
			print("  -"*20, file=out)
			print(i, file=out)
		out.flush()

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

"""
Name-spaces for mounted helpers, with support for nested scopes.

A host evaluator typically has one global scope holding ``String`` and
friends, and may open child scopes for things it wants to shadow.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

class AlreadyExists(KeyError): pass
class Absent(KeyError): pass

class Space(ABC):
	@abstractmethod
	def __contains__(self, key: str) -> bool: pass

	@abstractmethod
	def symbol(self, key: str) -> Optional[Any]: pass

	@abstractmethod
	def mount(self, key:str, symbol:Any) -> Any: pass

	def fetch(self, key: str) -> Any:
		found = self.symbol(key)
		if found is None:
			raise Absent(key)
		return found

	def child(self) -> "Chain":
		return Chain(Layer(), self)


class Layer(Space):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """

	def __init__(self):
		self._symbol = {}

	def __contains__(self, key: str) -> bool:
		return key in self._symbol

	def symbol(self, key: str) -> Optional[Any]:
		return self._symbol.get(key)

	def mount(self, key:str, symbol:Any) -> Any:
		if key in self._symbol:
			raise AlreadyExists(key)
		else:
			self._symbol[key] = symbol
			return symbol


class Chain(Space):
	def __init__(self, top:Space, rest:Space):
		self.top = top
		self._rest = rest

	def __contains__(self, key: str) -> bool:
		return key in self.top or key in self._rest

	def symbol(self, key: str) -> Optional[Any]:
		found = self.top.symbol(key)
		return self._rest.symbol(key) if found is None else found

	def mount(self, key:str, symbol:Any) -> Any:
		return self.top.mount(key, symbol)

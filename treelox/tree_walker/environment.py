"""
Activation records for the tree-walker: the canonical list-structured search,
except nobody searches. The resolver already counted the hops.

A frame owns its bindings and points at the frame it was made from.
Closures, instances' bound methods, and active calls all hold frames;
Python keeps each one alive as long as anybody still refers to it.
The parent link never changes after construction, so no cycles arise.
"""
import sys
from typing import Optional, TextIO
from ..diagnostics import RuntimeNameError
from .types import VALUE

class Frame:
	_bindings : dict[str, VALUE]
	static_link : Optional["Frame"]
	out : TextIO

	def __init__(self, out:TextIO, static_link:Optional["Frame"]=None):
		self._bindings = {}
		self.static_link = static_link
		self.out = out

	def child(self) -> "Frame":
		return Frame(self.out, self)

	def holds(self, name:str) -> bool: return name in self._bindings

	def bind(self, name:str, value:VALUE):
		""" Declarations always land in this frame, shadowing anything further out. """
		self._bindings[name] = value

	def _hop(self, depth:int, name:str, complaint:str) -> "Frame":
		frame = self
		for _ in range(depth):
			frame = frame.static_link
			if frame is None: break
		if frame is None or name not in frame._bindings:
			raise RuntimeNameError(complaint % name)
		return frame

	def lookup(self, depth:int, name:str) -> VALUE:
		return self._hop(depth, name, "Unbound variable '%s'.")._bindings[name]

	def assign(self, depth:int, name:str, value:VALUE):
		self._hop(depth, name, "Cannot assign to unbound variable '%s'.")._bindings[name] = value

def root_frame(out:Optional[TextIO]=None) -> Frame:
	""" The bottom of every chain. Output from `print` goes to `out`. """
	return Frame(sys.stdout if out is None else out)

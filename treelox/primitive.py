"""
Build the primitive namespace: the native capabilities
bound into the root frame before any program runs.
"""
import time
from .tree_walker.environment import Frame
from .tree_walker.values import Builtin

def _clock(caller:Frame) -> float:
	""" Seconds since the epoch, as a number. """
	return time.time()

BUILTINS = [
	Builtin("clock", 0, _clock),
]

def install_builtins(frame:Frame) -> Frame:
	for b in BUILTINS:
		frame.bind(b.name, b)
	return frame

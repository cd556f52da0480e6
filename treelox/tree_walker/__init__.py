"""
The run-time: frames, values, and one evaluation method per kind of syntax node.
"""

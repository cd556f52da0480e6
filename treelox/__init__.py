"""
A tree-walking interpreter for Lox: static resolution of lexical depth, then direct evaluation.
"""

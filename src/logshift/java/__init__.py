"""
Java frontend: tree-sitter parser, syntax tree and the reference collaborators
(type resolver, template synthesizer, import manager, printer).
"""

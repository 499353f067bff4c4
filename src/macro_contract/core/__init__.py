"""
Core macro expansion machinery: lexer, extraction helpers, registry and engine.
"""

"""Lexer, lexeme dump, syntax checker and POLIZ translator for a tiny imperative language."""
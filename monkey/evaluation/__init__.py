"""Tree-walking evaluation: the evaluator, quote/unquote and macro expansion."""

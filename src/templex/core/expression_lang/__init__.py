"""
templex expression language.

Tokenizer, parser and evaluator for the expressions embedded in template
placeholders.

Usage:
    from templex.core.expression_lang import evaluate, parse_expression
    from templex.core.settings import default_settings

    expr = parse_expression("box1 + box2 * 2", default_settings())
    result = evaluate(expr, {"box1": 100, "box2": 50})
    # result == 200
"""

from templex.core.expression_lang.evaluator import evaluate
from templex.core.expression_lang.parser import parse_expression
from templex.core.expression_lang.tokenizer import tokenize

__all__ = ["evaluate", "parse_expression", "tokenize"]

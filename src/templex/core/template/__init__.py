"""
Template layer: escape codec, brace splitter, display serializer and the
Template value itself.

Usage:
    from templex.core.template.template import parse

    template = parse("Hello {name}")
    template.resolve({"name": "World"})
    # "Hello World"
"""

"""
Core templex engine: expression language, template layer, settings and errors.
"""

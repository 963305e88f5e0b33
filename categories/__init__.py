"""
Built-in report categories.

Each subpackage exposes ``register()``, which adds the category to the
process-global registry in :mod:`dumpinfo`.
"""

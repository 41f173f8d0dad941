# products/services/__init__.py

"""
Product services.

Import submodules directly (products.services.deletion, ...).
products.models imports products.services.packaging, so this package
must not import anything that touches models.
"""

# ================================
# FILE: app/__init__.py
# ================================
# empty package marker

"""
pulse_modules -- domain modules of the analytics read path.

Each module keeps frozen DTOs in ``models.py`` and SQLAlchemy persistence
in ``orm.py``.  ``analytics`` and ``resources`` add the pure calculations,
selectors and services that read them.
"""

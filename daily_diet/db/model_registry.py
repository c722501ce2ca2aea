"""
Import every model module here once so that Base.metadata is fully populated.

Add a single import line here whenever you create a new model module.
"""

from daily_diet.db.base import Base  # the shared Declarative Base

# --- import all model modules (side-effect: tables register on Base.metadata)
from daily_diet.models import user  # noqa
from daily_diet.models import meal  # noqa

# expose for Alembic and for tests that create the schema directly
metadata = Base.metadata

"""ORM Models — SQLAlchemy declarative models for the record collections.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the partition root; species and individuals carry project_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from studbook.models.project import ProjectRow  # noqa: F401
from studbook.models.species import SpeciesRow  # noqa: F401
from studbook.models.individual import IndividualRow  # noqa: F401
from studbook.models.app_state import AppStateRow  # noqa: F401

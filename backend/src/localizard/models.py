"""Import every table model so SQLModel.metadata and mapper relationships are complete.

Used by Alembic, the startup scripts and the test suite.
"""

from localizard.api_keys.models import ApiKey
from localizard.auth.models import User
from localizard.labels.models import Label
from localizard.locales.models import Locale
from localizard.projects.models import Project
from localizard.translations.models import Translation

__all__ = ["ApiKey", "Label", "Locale", "Project", "Translation", "User"]

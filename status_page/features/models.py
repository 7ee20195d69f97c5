"""Import every model so ``Base.metadata`` knows all tables."""

from __future__ import annotations

from status_page.features.incidents.models import Incident, IncidentUpdate
from status_page.features.maintenance.models import Maintenance
from status_page.features.status.models import StatusCheck
from status_page.features.subscribers.models import Subscriber

__all__ = ["Incident", "IncidentUpdate", "Maintenance", "StatusCheck", "Subscriber"]

# src/seasonchain/emissions/__init__.py
from .schedule import EmissionConfig, EmissionsSchedule, EmissionTelemetry, EmissionsPreview
from .audit import EmissionAudit, audit_emissions

__all__ = [
    'EmissionConfig', 'EmissionsSchedule', 'EmissionTelemetry', 'EmissionsPreview',
    'EmissionAudit', 'audit_emissions'
]

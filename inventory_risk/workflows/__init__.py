"""Workflow orchestration for dashboard recomputation."""

from .dashboard_workflow import DashboardInputs, DashboardResult, RiskDashboardWorkflow

__all__ = [
    'DashboardInputs',
    'DashboardResult',
    'RiskDashboardWorkflow',
]

from agentdocs.permissions.engine import PermissionDecision, PermissionEngine
from agentdocs.permissions.log import DecisionLog, DecisionRecord

__all__ = ["PermissionDecision", "PermissionEngine", "DecisionLog", "DecisionRecord"]

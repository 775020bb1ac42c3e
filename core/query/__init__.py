"""Query Module - hiring request parsing."""
from core.query.models import ParsedQuery, RoleRequirement, SalaryRange
from core.query.parser import RoleQueryParser

__all__ = ['ParsedQuery', 'RoleRequirement', 'SalaryRange', 'RoleQueryParser']

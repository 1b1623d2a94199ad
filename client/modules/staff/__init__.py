"""
Staff module.

Public API:
- IStaffService / StaffService: Client for /api/staff
- StaffMember, StaffPage, merge_pages: Directory models and paging helper
"""

from .interfaces import IStaffService
from .models import StaffMember, StaffPage, merge_pages
from .service import StaffService
from .exceptions import MissingStaffNameError, StaffImageUploadError

__all__ = [
    "IStaffService",
    "StaffService",
    "StaffMember",
    "StaffPage",
    "merge_pages",
    "MissingStaffNameError",
    "StaffImageUploadError",
]

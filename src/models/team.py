"""
Users, roles and team applications.

Responsibility: Closed vocabularies for back-office users and recruiting
"""

from enum import Enum


class UserRole(str, Enum):
    """Back-office role"""
    ADMIN = "admin"
    EDITOR = "editor"
    USER = "user"


class ApplicationStatus(str, Enum):
    """Review state of a team application"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

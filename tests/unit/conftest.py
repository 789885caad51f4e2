from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.license_gateway import LicenseResult, LicenseSummary
from src.app.services.notification_gateway import InviteEmailResult
from src.app.services.provisioning_policy import ProvisioningPolicy
from src.app.validators import default_registry


def make_repository(items=None):
    """Repository mock backed by a list; predicates and partition options are honored"""
    repo = MagicMock()
    repo.items = list(items or [])

    def get_many(predicate, options):
        options.ensure_targeted()
        return [item for item in repo.items if options.matches(item) and predicate(item)]

    def get_by_id(item_id, options=None):
        return next((item for item in repo.items if item.id == item_id), None)

    def create(item):
        if getattr(item, "id", None) is None:
            item.id = uuid4()
        repo.items.append(item)
        return item

    def update(item_id, item):
        repo.items = [item if existing.id == item_id else existing for existing in repo.items]
        return item

    repo.get_many = AsyncMock(side_effect=get_many)
    repo.get_by_id = AsyncMock(side_effect=get_by_id)
    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(side_effect=update)
    repo.delete = AsyncMock()
    repo.query_page = AsyncMock()
    return repo


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.principals = make_repository()
    uow.groups = make_repository()
    uow.invites = make_repository()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    return uow


@pytest.fixture
def mock_licenses():
    licenses = MagicMock()
    licenses.assign = AsyncMock(return_value=LicenseResult(success=True))
    licenses.release = AsyncMock(return_value=LicenseResult(success=True))
    licenses.tenant_summary = AsyncMock(
        return_value=[LicenseSummary(tier_name="user_license", total_available=5)]
    )
    licenses.user_license_detail = AsyncMock(return_value=[])
    return licenses


@pytest.fixture
def mock_directory():
    directory = MagicMock()
    directory.accepted_domains = AsyncMock(return_value=["acme.com"])
    directory.domain_owner_ids = AsyncMock(return_value=[])
    directory.member_ids = AsyncMock(return_value=[])
    return directory


@pytest.fixture
def mock_notifications():
    notifications = MagicMock()
    notifications.send_welcome = AsyncMock(return_value=True)
    notifications.send_locked_notice = AsyncMock(return_value=True)
    notifications.send_invite = AsyncMock(
        side_effect=lambda invites: [
            InviteEmailResult(email=invite.email, accepted=True) for invite in invites
        ]
    )
    return notifications


@pytest.fixture
def validators():
    return default_registry()


@pytest.fixture
def policy():
    return ProvisioningPolicy()

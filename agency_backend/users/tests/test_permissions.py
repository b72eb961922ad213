# users/tests/test_permissions.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import (
    CAP_ACCOUNTING_POST,
    CAP_SEGMENTS_SAVE,
    CAP_SEGMENTS_VIEW,
    HasCapability,
    IsAdmin,
    IsStaff,
    user_has_capability,
)

User = get_user_model()


class _View:
    required_capabilities = {"GET": CAP_SEGMENTS_VIEW, "POST": CAP_SEGMENTS_SAVE}


class _UnprotectedView:
    pass


class RolePermissionTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.accountant = User.objects.create_user(
            email="accountant@example.com", password="pass", role="accountant"
        )
        self.agent = User.objects.create_user(email="agent@example.com", password="pass", role="agent")

    def _request(self, method, user):
        request = getattr(self.factory, method)("/")
        request.user = user
        return request

    def test_role_permissions(self):
        self.assertTrue(IsAdmin().has_permission(self._request("get", self.admin), None))
        self.assertFalse(IsAdmin().has_permission(self._request("get", self.agent), None))
        self.assertTrue(IsStaff().has_permission(self._request("get", self.agent), None))

    def test_capability_per_method(self):
        perm = HasCapability()

        self.assertTrue(perm.has_permission(self._request("get", self.agent), _View()))
        self.assertFalse(perm.has_permission(self._request("post", self.agent), _View()))
        self.assertTrue(perm.has_permission(self._request("post", self.accountant), _View()))

    def test_view_without_capability_is_denied(self):
        self.assertFalse(HasCapability().has_permission(self._request("get", self.admin), _UnprotectedView()))

    def test_anonymous_denied(self):
        self.assertFalse(HasCapability().has_permission(self._request("get", None), _View()))
        self.assertFalse(user_has_capability(None, CAP_ACCOUNTING_POST))

    def test_accountant_can_post_but_agent_cannot(self):
        self.assertTrue(user_has_capability(self.accountant, CAP_ACCOUNTING_POST))
        self.assertFalse(user_has_capability(self.agent, CAP_ACCOUNTING_POST))

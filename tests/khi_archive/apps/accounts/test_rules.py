"""
Tests for the django-rules permissions.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser

from khi_archive.apps.accounts import api as accounts_api
from khi_archive.apps.accounts.roles import Role
from khi_archive.lib.test_utils import TestCase

User = get_user_model()


class TestContentRules(TestCase):

    @classmethod
    def setUpTestData(cls) -> None:
        cls.nobody = User.objects.create(username="nobody")
        cls.employee = User.objects.create(username="employee")
        accounts_api.set_user_role(cls.employee, Role.EMPLOYEE)
        cls.staff = User.objects.create(username="staff", is_staff=True)
        cls.superuser = User.objects.create(username="root", is_superuser=True)

    def test_anyone_can_view(self):
        assert AnonymousUser().has_perm("khi_content.view_content")
        assert self.nobody.has_perm("khi_content.view_content")

    def test_change_content(self):
        assert not AnonymousUser().has_perm("khi_content.change_content")
        assert not self.nobody.has_perm("khi_content.change_content")
        assert self.employee.has_perm("khi_content.change_content")
        assert self.staff.has_perm("khi_content.change_content")
        assert self.superuser.has_perm("khi_content.change_content")


class TestAccountRules(TestCase):

    @classmethod
    def setUpTestData(cls) -> None:
        cls.employee = User.objects.create(username="employee")
        accounts_api.set_user_role(cls.employee, Role.EMPLOYEE)
        cls.admin = User.objects.create(username="admin")
        accounts_api.set_user_role(cls.admin, Role.ADMIN)

    def test_employee(self):
        assert self.employee.has_perm("khi_accounts.user_read")
        assert self.employee.has_perm("khi_accounts.user_create")
        assert not self.employee.has_perm("khi_accounts.user_delete")

    def test_admin(self):
        assert self.admin.has_perm("khi_accounts.user_delete")

    def test_anonymous(self):
        assert not AnonymousUser().has_perm("khi_accounts.user_read")

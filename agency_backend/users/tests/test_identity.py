# users/tests/test_identity.py

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from common.exceptions import AuthorizationError
from users.services.identity import Actor, resolve_actor

User = get_user_model()


class ResolveActorTests(TestCase):
    def test_authenticated_user_resolves_to_actor(self):
        user = User.objects.create_user(
            email="sara@example.com",
            password="pass",
            first_name="Sara",
            last_name="Karim",
        )

        actor = resolve_actor(user)

        self.assertEqual(actor, Actor(uid=str(user.pk), name="Sara Karim"))

    def test_display_name_falls_back_to_username(self):
        user = User.objects.create_user(email="omar@example.com", password="pass")

        self.assertEqual(resolve_actor(user).name, "omar")

    def test_anonymous_user_is_rejected(self):
        with self.assertRaises(AuthorizationError):
            resolve_actor(AnonymousUser())

    def test_missing_user_is_rejected(self):
        with self.assertRaises(AuthorizationError):
            resolve_actor(None)

    def test_inactive_user_is_rejected(self):
        user = User.objects.create_user(
            email="old@example.com", password="pass", is_active=False
        )

        with self.assertRaises(AuthorizationError):
            resolve_actor(user)

"""Tests for the identity gate, using the real JWT codec."""

import pytest

from storefront.application.identity_gate import IdentityGate
from storefront.domain.exceptions import Forbidden, Unauthenticated
from storefront.domain.model.actor import Actor, Role
from storefront.infrastructure.auth.jwt_codec import JwtTokenCodec


@pytest.fixture()
def codec():
    return JwtTokenCodec(secret="test-secret")


@pytest.fixture()
def gate(codec):
    return IdentityGate(codec)


class TestResolve:

    def test_buyer_token(self, gate, codec):
        token = codec.issue("u1", Role.BUYER)
        assert gate.resolve(token) == Actor.buyer("u1")

    def test_seller_token(self, gate, codec):
        token = codec.issue("admin", Role.SELLER)
        assert gate.resolve(token) == Actor.seller("admin")

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, gate, token):
        with pytest.raises(Unauthenticated, match="Not authorized"):
            gate.resolve(token)

    def test_garbage_token(self, gate):
        with pytest.raises(Unauthenticated):
            gate.resolve("not-a-jwt")

    def test_forged_token(self, gate):
        forged = JwtTokenCodec(secret="someone-else").issue("u1", Role.SELLER)
        with pytest.raises(Unauthenticated):
            gate.resolve(forged)


class TestRequireRole:

    def test_matching_role(self, gate, codec):
        token = codec.issue("u1", Role.BUYER)
        assert gate.require_role(token, Role.BUYER).id == "u1"

    def test_wrong_role(self, gate, codec):
        token = codec.issue("u1", Role.BUYER)
        with pytest.raises(Forbidden):
            gate.require_role(token, Role.SELLER)

    def test_unauthenticated_before_forbidden(self, gate):
        with pytest.raises(Unauthenticated):
            gate.require_role(None, Role.SELLER)

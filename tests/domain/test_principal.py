"""Unit tests for Principal role checks."""

import pytest

from wholesale.domain.exceptions import ForbiddenError
from wholesale.domain.model.principal import Principal, Role


def test_seller_principal():
    assert Principal.seller("g1").require_seller() == "g1"


def test_buyer_principal():
    assert Principal.buyer("d1").require_buyer() == "d1"


def test_buyer_cannot_act_as_seller():
    with pytest.raises(ForbiddenError, match="not a seller"):
        Principal.buyer("d1").require_seller()


def test_seller_cannot_act_as_buyer():
    with pytest.raises(ForbiddenError, match="not a buyer"):
        Principal.seller("g1").require_buyer()


def test_admin_is_neither():
    admin = Principal(user_id="root", role=Role.ADMIN)
    with pytest.raises(ForbiddenError):
        admin.require_seller()
    with pytest.raises(ForbiddenError):
        admin.require_buyer()


def test_grower_without_seller_id_rejected():
    with pytest.raises(ForbiddenError):
        Principal(user_id="u1", role=Role.GROWER).require_seller()

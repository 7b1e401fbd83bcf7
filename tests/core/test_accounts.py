"""账户服务单元测试"""

from decimal import Decimal

import pytest
from taskcoin.core.exceptions import UsernameExistsError


class TestRegisterUser:
    async def test_starting_balance(self, accounts):
        user = await accounts.register_user("newbie", "hash:salt")
        assert user.coin == Decimal("100.00")
        assert user.username == "newbie"
        assert user.user_id > 0

    async def test_duplicate_username(self, accounts, store_group):
        await accounts.register_user("twin", "hash:salt")
        with pytest.raises(UsernameExistsError):
            await accounts.register_user("twin", "other:salt")

        user_count, _ = await store_group.user_store.get_balance_totals()
        assert user_count == 1

    async def test_find_user_by_username(self, accounts):
        created = await accounts.register_user("finder", "digest:salt")
        user = await accounts.find_user_by_username("finder")
        assert user is not None
        assert user.user_id == created.user_id
        assert user.password_hash == "digest:salt"
        assert await accounts.find_user_by_username("ghost") is None

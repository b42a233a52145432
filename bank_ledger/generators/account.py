"""Demo account generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator

from bank_ledger.config import PolicyConfig
from bank_ledger.generators.base import BaseGenerator
from bank_ledger.models import AccountType, to_money

if TYPE_CHECKING:
    from bank_ledger.ledger import Ledger

logger = logging.getLogger(__name__)


@dataclass
class AccountRequest:
    """Input for ``Ledger.create_account``."""

    name: str
    address: str
    phone_number: str
    initial_deposit: Decimal
    account_type: AccountType


class AccountRequestGenerator(BaseGenerator):
    """Generate plausible account opening requests.

    - CHECKING: ~65% of requests, deposit anywhere from zero upwards
    - SAVINGS: ~35%, deposit at or above the savings minimum
    """

    ACCOUNT_TYPES = [AccountType.CHECKING, AccountType.SAVINGS]
    ACCOUNT_TYPE_WEIGHTS = [0.65, 0.35]

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        policy: PolicyConfig | None = None,
    ) -> None:
        super().__init__(seed, locale)
        self.policy = policy or PolicyConfig()

    def generate(self) -> AccountRequest:
        """Generate a single account request."""
        account_type = self.rng.choices(
            self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
        )[0]

        # Log-normal deposit, median around 800
        deposit = Decimal(str(round(self.rng.lognormvariate(6.7, 1.0), 2)))
        deposit = max(deposit, self.policy.minimum_deposit(account_type))

        return AccountRequest(
            name=self.fake.name(),
            address=self.fake.address().replace("\n", ", "),
            phone_number=self.fake.phone_number(),
            initial_deposit=to_money(deposit),
            account_type=account_type,
        )

    def generate_batch(self, count: int) -> Iterator[AccountRequest]:
        """Generate ``count`` account requests."""
        for _ in range(count):
            yield self.generate()


def populate_demo_accounts(
    ledger: Ledger,
    count: int,
    seed: int | None = None,
    locale: str = "en_US",
) -> list[str]:
    """Open ``count`` demo accounts through the ledger.

    Returns
    -------
    list[str]
        Account numbers of the new accounts.
    """
    generator = AccountRequestGenerator(seed=seed, locale=locale, policy=ledger.policy)
    numbers = []
    for request in generator.generate_batch(count):
        numbers.append(
            ledger.create_account(
                name=request.name,
                address=request.address,
                phone_number=request.phone_number,
                initial_deposit=request.initial_deposit,
                account_type=request.account_type,
            )
        )
    logger.info("Created %d demo accounts", len(numbers))
    return numbers

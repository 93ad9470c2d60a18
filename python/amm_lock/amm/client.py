"""Dynamic AMM transaction builders.

Builds, but never signs or sends, the transactions that create a
constant-product pool from a fee config and lock LP tokens into
per-beneficiary escrows. Signing and submission belong to
``amm_lock.svm.runner.TransactionRunner``.
"""

import logging
from typing import Protocol, Sequence

from solders.compute_budget import set_compute_unit_limit  # type: ignore
from solders.hash import Hash  # type: ignore
from solders.instruction import AccountMeta, Instruction  # type: ignore
from solders.message import Message  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.system_program import ID as SYSTEM_PROGRAM_ID  # type: ignore
from solders.sysvar import RENT  # type: ignore
from solders.transaction import Transaction  # type: ignore
from spl.token.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID  # type: ignore
from spl.token.instructions import create_idempotent_associated_token_account  # type: ignore

from ..svm.session import LockSession
from ..svm.utils import to_pubkey
from .constants import (
    IX_CREATE_LOCK_ESCROW,
    IX_INITIALIZE_POOL_WITH_CONFIG,
    IX_INITIALIZE_VAULT,
    IX_LOCK,
    METAPLEX_PROGRAM_ID,
    POOL_CREATION_COMPUTE_UNITS,
    PROGRAM_ID,
    VAULT_PROGRAM_ID,
)
from .types import PoolState
from .utils import (
    anchor_discriminator,
    derive_lock_escrow,
    derive_lp_mint,
    derive_mint_metadata,
    derive_pool_address_with_config,
    derive_protocol_fee,
    derive_token_vault,
    derive_vault,
    derive_vault_lp,
    derive_vault_lp_mint,
    encode_u64,
    get_associated_token_account,
)

logger = logging.getLogger(__name__)


class AmmPool(Protocol):
    """A live pool able to build lock-liquidity transactions."""

    @property
    def address(self) -> Pubkey:
        ...

    @property
    def lp_mint(self) -> Pubkey:
        ...

    def build_lock_liquidity_transaction(
        self,
        beneficiary: Pubkey,
        amount: int,
        authority: Pubkey,
    ) -> Transaction:
        """Lock ``amount`` LP tokens of ``authority`` for ``beneficiary``."""
        ...


class AmmClient(Protocol):
    """Builds pool creation transactions and loads live pools."""

    def derive_pool_address(self, token_a_mint: Pubkey, token_b_mint: Pubkey, config: Pubkey) -> Pubkey:
        ...

    def build_pool_creation_transactions(
        self,
        payer: Pubkey,
        token_a_mint: Pubkey,
        token_b_mint: Pubkey,
        token_a_amount: int,
        token_b_amount: int,
        config: Pubkey,
    ) -> list[Transaction]:
        ...

    def load_pool(self, pool: Pubkey) -> AmmPool:
        ...


def _unsigned(instructions: Sequence[Instruction], payer: Pubkey, blockhash: Hash) -> Transaction:
    message = Message.new_with_blockhash(list(instructions), payer, blockhash)
    return Transaction.new_unsigned(message)


class DynamicAmmPool:
    """Handle on an existing dynamic AMM pool."""

    def __init__(self, session: LockSession, state: PoolState, program_id: Pubkey = PROGRAM_ID):
        self._session = session
        self._state = state
        self._program_id = program_id

    @property
    def address(self) -> Pubkey:
        return self._state.address

    @property
    def lp_mint(self) -> Pubkey:
        return self._state.lp_mint

    @property
    def state(self) -> PoolState:
        return self._state

    def build_lock_liquidity_transaction(
        self,
        beneficiary: Pubkey,
        amount: int,
        authority: Pubkey,
    ) -> Transaction:
        """Build a transaction moving ``amount`` LP of ``authority`` into
        the lock escrow of ``beneficiary``.

        The escrow and its LP vault are created in the same transaction
        when they do not exist yet. ``authority`` pays and signs.
        """
        beneficiary = to_pubkey(beneficiary)
        state = self._state
        lock_escrow = derive_lock_escrow(state.address, beneficiary, self._program_id)
        escrow_vault = get_associated_token_account(state.lp_mint, lock_escrow)
        source_tokens = get_associated_token_account(state.lp_mint, authority)

        instructions: list[Instruction] = []
        if not self._session.account_exists(lock_escrow):
            logger.debug("creating lock escrow %s for %s", lock_escrow, beneficiary)
            instructions.append(
                Instruction(
                    self._program_id,
                    anchor_discriminator(IX_CREATE_LOCK_ESCROW),
                    [
                        AccountMeta(state.address, is_signer=False, is_writable=False),
                        AccountMeta(lock_escrow, is_signer=False, is_writable=True),
                        AccountMeta(beneficiary, is_signer=False, is_writable=False),
                        AccountMeta(state.lp_mint, is_signer=False, is_writable=False),
                        AccountMeta(authority, is_signer=True, is_writable=True),
                        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
                    ],
                )
            )
        instructions.append(
            create_idempotent_associated_token_account(authority, lock_escrow, state.lp_mint)
        )
        instructions.append(
            Instruction(
                self._program_id,
                anchor_discriminator(IX_LOCK) + encode_u64(amount),
                [
                    AccountMeta(state.address, is_signer=False, is_writable=True),
                    AccountMeta(state.lp_mint, is_signer=False, is_writable=False),
                    AccountMeta(lock_escrow, is_signer=False, is_writable=True),
                    AccountMeta(authority, is_signer=True, is_writable=True),
                    AccountMeta(source_tokens, is_signer=False, is_writable=True),
                    AccountMeta(escrow_vault, is_signer=False, is_writable=True),
                    AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
                    AccountMeta(state.a_vault, is_signer=False, is_writable=False),
                    AccountMeta(state.b_vault, is_signer=False, is_writable=False),
                    AccountMeta(state.a_vault_lp, is_signer=False, is_writable=False),
                    AccountMeta(state.b_vault_lp, is_signer=False, is_writable=False),
                    AccountMeta(state.a_vault_lp_mint, is_signer=False, is_writable=False),
                    AccountMeta(state.b_vault_lp_mint, is_signer=False, is_writable=False),
                ],
            )
        )
        return _unsigned(instructions, authority, self._session.get_latest_blockhash())


class DynamicAmmClient:
    """Dynamic AMM builder bound to a session."""

    def __init__(self, session: LockSession, program_id: Pubkey = PROGRAM_ID):
        self._session = session
        self._program_id = program_id

    def derive_pool_address(self, token_a_mint: Pubkey, token_b_mint: Pubkey, config: Pubkey) -> Pubkey:
        return derive_pool_address_with_config(token_a_mint, token_b_mint, config, self._program_id)

    def build_pool_creation_transactions(
        self,
        payer: Pubkey,
        token_a_mint: Pubkey,
        token_b_mint: Pubkey,
        token_a_amount: int,
        token_b_amount: int,
        config: Pubkey,
    ) -> list[Transaction]:
        """Build the transactions creating a pool from a fee config.

        One vault initialisation transaction is emitted for each mint
        that has no vault yet, followed by the pool initialisation.
        """
        token_a_mint, token_b_mint = to_pubkey(token_a_mint), to_pubkey(token_b_mint)
        config = to_pubkey(config)
        blockhash = self._session.get_latest_blockhash()
        transactions: list[Transaction] = []

        a_vault = derive_vault(token_a_mint)
        b_vault = derive_vault(token_b_mint)
        for mint, vault in ((token_a_mint, a_vault), (token_b_mint, b_vault)):
            if not self._session.account_exists(vault):
                logger.info("vault for %s missing, initialising %s", mint, vault)
                transactions.append(_unsigned([self._initialize_vault_ix(payer, mint, vault)], payer, blockhash))

        pool = self.derive_pool_address(token_a_mint, token_b_mint, config)
        lp_mint = derive_lp_mint(pool, self._program_id)
        a_vault_lp_mint = derive_vault_lp_mint(a_vault)
        b_vault_lp_mint = derive_vault_lp_mint(b_vault)

        accounts = [
            (pool, False, True),
            (config, False, False),
            (lp_mint, False, True),
            (token_a_mint, False, False),
            (token_b_mint, False, False),
            (a_vault, False, True),
            (b_vault, False, True),
            (derive_token_vault(a_vault), False, True),
            (derive_token_vault(b_vault), False, True),
            (a_vault_lp_mint, False, True),
            (b_vault_lp_mint, False, True),
            (derive_vault_lp(a_vault, pool, self._program_id), False, True),
            (derive_vault_lp(b_vault, pool, self._program_id), False, True),
            (get_associated_token_account(token_a_mint, payer), False, True),
            (get_associated_token_account(token_b_mint, payer), False, True),
            (get_associated_token_account(lp_mint, payer), False, True),
            (derive_protocol_fee(token_a_mint, pool, self._program_id), False, True),
            (derive_protocol_fee(token_b_mint, pool, self._program_id), False, True),
            (payer, True, True),
            (RENT, False, False),
            (derive_mint_metadata(lp_mint), False, True),
            (METAPLEX_PROGRAM_ID, False, False),
            (VAULT_PROGRAM_ID, False, False),
            (TOKEN_PROGRAM_ID, False, False),
            (ASSOCIATED_TOKEN_PROGRAM_ID, False, False),
            (SYSTEM_PROGRAM_ID, False, False),
        ]
        initialize_ix = Instruction(
            self._program_id,
            anchor_discriminator(IX_INITIALIZE_POOL_WITH_CONFIG)
            + encode_u64(token_a_amount)
            + encode_u64(token_b_amount),
            [AccountMeta(key, is_signer=signer, is_writable=writable) for key, signer, writable in accounts],
        )
        transactions.append(
            _unsigned(
                [set_compute_unit_limit(POOL_CREATION_COMPUTE_UNITS), initialize_ix],
                payer,
                blockhash,
            )
        )
        return transactions

    def load_pool(self, pool: Pubkey) -> DynamicAmmPool:
        """Fetch a pool account and return a handle on it.

        Raises:
            ValueError: If the pool account does not exist.
        """
        pool = to_pubkey(pool)
        data = self._session.get_account_data(pool)
        if data is None:
            raise ValueError(f"Pool {pool} does not exist")
        return DynamicAmmPool(self._session, PoolState.from_account_data(pool, data), self._program_id)

    def _initialize_vault_ix(self, payer: Pubkey, mint: Pubkey, vault: Pubkey) -> Instruction:
        return Instruction(
            VAULT_PROGRAM_ID,
            anchor_discriminator(IX_INITIALIZE_VAULT),
            [
                AccountMeta(vault, is_signer=False, is_writable=True),
                AccountMeta(payer, is_signer=True, is_writable=True),
                AccountMeta(derive_token_vault(vault), is_signer=False, is_writable=True),
                AccountMeta(mint, is_signer=False, is_writable=False),
                AccountMeta(derive_vault_lp_mint(vault), is_signer=False, is_writable=True),
                AccountMeta(RENT, is_signer=False, is_writable=False),
                AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
                AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            ],
        )

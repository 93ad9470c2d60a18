"""Create a dynamic AMM pool and lock its liquidity for the beneficiaries below.

One-shot script: creates the pool, reads the payer's LP balance, splits
it across the allocations and locks each share into the beneficiary's
escrow. Prints a JSON result and exits non-zero on the first failure.

Environment:
    PAYER_SECRET_KEY: base58 secret key of the payer (required).
    RPC_URL: Solana RPC endpoint (defaults to devnet).
"""

import json
import logging
import os
import sys

from dotenv import load_dotenv

from amm_lock import (
    AllocationByPercentage,
    KeypairSigner,
    LockLiquidityError,
    LockSession,
    create_pool_and_lock_liquidity,
)
from amm_lock.svm import SOLANA_DEVNET_CAIP2

load_dotenv()

# 1. Tokens of the pool
TOKEN_A_MINT = "CfmVE9LQqRAHmSGDVkUoRbtiHbPKERUDaZ7Skw8DT4zN"
TOKEN_B_MINT = "BXTou3CvPxpFVAJvzvEZcAnRLGCHqT1LHKsFTSQft7s"

# 2. Configuration account of the pool. It decides the fees of the pool.
CONFIG = "21PjsfQVgrn56jSypUT5qXwwSjwKWvuoBCKbVZrgTLz4"

# 3. Allocation of the locked LP. The first address gets 80% of the fees
# of the locked liquidity, the second 20%.
ALLOCATIONS = [
    AllocationByPercentage(address="4sBMz7zmDWPzdEnECJW3NA9mEcNwkjYtVnL2KySaWYAf", percentage=80),
    AllocationByPercentage(address="CVV5MxfwA24PsM7iuS2ddssYgySf5SxVJ8PpAwGN2yVy", percentage=20),
]

# 4. Amounts of token A and B deposited to the pool, then locked
TOKEN_A_AMOUNT = 100_000_000
TOKEN_B_AMOUNT = 6_000_000_000

NETWORK = SOLANA_DEVNET_CAIP2

logger = logging.getLogger("create_pool")


def main() -> dict:
    """Run pool creation and locking. Returns the result dict."""
    signer = KeypairSigner.from_env()
    session = LockSession.connect(signer, network=NETWORK, rpc_url=os.getenv("RPC_URL") or None)
    logger.info("payer %s", signer.address)

    try:
        result = create_pool_and_lock_liquidity(
            session,
            TOKEN_A_MINT,
            TOKEN_B_MINT,
            TOKEN_A_AMOUNT,
            TOKEN_B_AMOUNT,
            CONFIG,
            ALLOCATIONS,
        )
    except LockLiquidityError as e:
        logger.error("aborted: %s", e)
        # Resume from this step; earlier steps are already final on-chain
        return {"success": False, "error": str(e), "step": getattr(e, "label", None)}

    logger.info("Liquidity pool created at: %s", result.pool)
    return {"success": True, **result.to_dict()}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        run_result = main()
    except ValueError as e:
        # Missing or malformed key
        run_result = {"success": False, "error": str(e)}
    print(json.dumps(run_result))
    sys.exit(0 if run_result.get("success") else 1)

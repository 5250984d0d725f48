from typing import Dict

# The rest of the codebase uses mojos everywhere.
# Only use these units for user facing interfaces.
units: Dict[str, int] = {
    "chia": 10 ** 12,  # 1 chia (XCH) is 1,000,000,000,000 mojo (1 trillion)
    "mojo": 1,
}


def mojo_to_chia(mojo: int) -> float:
    return mojo / units["chia"]

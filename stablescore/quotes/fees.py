# One-time application fees charged by certain carriers, keyed by display name
from typing import Dict, Optional

CARRIER_FEES: Dict[str, Dict[str, object]] = {
    "Aetna": {"application_fee": 20.0, "description": "One-time application fee"},
    # includes Atlantic Capital
    "Bankers Fidelity": {"application_fee": 25.0, "description": "One-time application fee"},
}


def application_fee(carrier_name: str) -> Optional[float]:
    info = CARRIER_FEES.get(carrier_name)
    return None if info is None else float(info["application_fee"])
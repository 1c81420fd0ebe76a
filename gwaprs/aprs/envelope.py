"""APRS-IS login envelope.

APRS-IS HTTP submission expects the login line followed by the packet,
each terminated by a newline:

    user N0CALL-13 pass 12345 vers GWtoAPRS 1.0
    N0CALL-13>APRS:@011423z...
"""

from gwaprs.config import BridgeConfig


def build_login_envelope(config: BridgeConfig, packet: str) -> str:
    """Wrap an encoded packet in the APRS-IS login line.

    Args:
        config: Supplies callsign, passcode and software identification
        packet: Encoded APRS packet (no trailing newline)

    Returns:
        Body to POST to the APRS-IS relay
    """
    login = (
        f"user {config.callsign} pass {config.passcode} "
        f"vers {config.software_name} {config.software_version}"
    )
    return f"{login}\n{packet}\n"

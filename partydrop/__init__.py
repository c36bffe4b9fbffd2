"""PartyDrop backend package."""

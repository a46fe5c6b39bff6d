"""Back-office API for a small electrical-services company."""

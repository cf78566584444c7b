"""Command line host for repoman."""

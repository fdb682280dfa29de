"""Flask JSON API for the asymmetric encryption comparison."""

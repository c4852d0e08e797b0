"""Helpdesk ticketing REST backend."""

"""Banco de Horas: Arbeitszeit-Ledger mit Saldo-Berechnung und Tabellen-Import."""

__version__ = "0.1.0"

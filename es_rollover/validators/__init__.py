"""Validators for es-rollover configuration"""

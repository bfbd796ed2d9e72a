"""Helper modules"""

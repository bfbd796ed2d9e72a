"""Default values and schema pieces"""

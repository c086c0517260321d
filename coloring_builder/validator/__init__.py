"""Checks for generated interiors: layout safe area and PDF conformance"""

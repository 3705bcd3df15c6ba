"""Kindergarten staff attendance and payroll package.

Organized by feature modules (shifts, attendance, payroll, settings, geo)
with a thin Flask controller layer over service/repository layers.
"""

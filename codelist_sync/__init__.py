# Path: codelist_sync/__init__.py
"""
codelist_sync - enumerated code list reconciliation

Keeps the enumeration lists and values of a ToolMap schema (Map store) and
an SPF schema (Target store) in step:

    INPUT:   ToolMap XML, SPF XML, .edt code lists, enum/sheet INI, hierarchy workbook
    PROCESS: list checks, list relation scan, value reconciliation
    OUTPUT:  versioned XML saves, run reports, optional audit database
"""

__version__ = '0.1.0'

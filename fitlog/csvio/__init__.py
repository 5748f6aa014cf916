# -*- coding: utf-8 -*-
"""CSV import/export of the daily log collection.

``codec`` handles the text format, ``schema`` maps rows to records, ``merge``
reconciles an import with the stored collection and ``export`` builds the
download.
"""

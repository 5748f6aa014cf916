# -*- coding: utf-8 -*-
"""fitlog — personal training and meal log backend."""

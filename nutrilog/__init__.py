# -*- coding: utf-8 -*-
"""nutrilog — personal nutrition tracking backend.

Durable state is two JSON documents: the user records (credentials, BMI,
meal history) and the read-only food catalog.
"""

__version__ = "1.0.0"

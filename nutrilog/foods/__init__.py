# -*- coding: utf-8 -*-
"""Food catalog (seeded once, read-only afterwards)."""

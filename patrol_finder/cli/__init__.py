# -*- coding: utf-8 -*-

"""Command line interface for patrol-finder."""

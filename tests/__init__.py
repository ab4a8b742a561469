"""Test suite for browser-proxy.

Unit tests live under unit/ in per-domain folders and are collected by the
root conftest.py. Shared fakes (launchers, a threaded echo backend) live
in the helpers/ subpackage. idle.py is a live tester meant to be pointed
at a running proxy; it is not collected by pytest.
"""

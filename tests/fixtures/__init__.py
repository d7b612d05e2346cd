"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_config.yaml: Sample configuration for testing
    - profiles/strict.yaml: Profile overlay for the sample configuration

Usage:
    Refer to fixture files via the fixtures_path pytest fixture.
"""

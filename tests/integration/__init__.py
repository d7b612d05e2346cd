"""
Integration Tests - End-to-End Pipeline Tests.

These tests run complete curation pipelines over generated mock records
and small SD files written to a temporary directory.

Test Files:
    - test_curation_pipeline.py: Pipeline fold, provenance and run outcomes
    - test_pipeline_from_config.py: Config-driven curation
"""

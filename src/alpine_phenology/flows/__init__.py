"""
Prefect flows for the analysis pipeline.

Flows:
- analyze: Read station, July and seed-set inputs; write derived tables
- build: Render figures and the HTML report from the stored tables

Usage (local):
    python -m alpine_phenology.flows.analyze
    python -m alpine_phenology.flows.build

Usage (CLI):
    alpine-phenology run
"""

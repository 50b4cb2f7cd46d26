"""Enrichment orchestration."""

from polymarket_alerts.services.enrichment.enrichment_orchestrator import EnrichmentOrchestrator

__all__ = ["EnrichmentOrchestrator"]

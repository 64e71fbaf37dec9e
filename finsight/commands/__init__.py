"""Command handlers: the imperative shell around finsight.domain."""

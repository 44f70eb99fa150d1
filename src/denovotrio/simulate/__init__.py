from .trio_reads import randomise, simulateReadSummary, simulateTrio

from .summary import Read, ReadSummary, readSummariesFromTable

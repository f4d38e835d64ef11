"""
Dental Voice: structured clinical records from dental consultation transcripts

Turns a free-text dentist-patient conversation into clinical history sections
and per-tooth diagnosis records, degrading from AI analysis to keyword
extraction when the analysis service is unavailable.
"""

__version__ = "0.1.0"
__author__ = "Dental Voice Team"
__description__ = "Dental consultation transcript extraction service"

"""nail_diagnosis_server — FastAPI REST API for the nail diagnosis SDK.

Exposes the DiagnosisPipeline as a stateless HTTP API: question bank
reference data, diagnosis submission, and a health probe.
"""

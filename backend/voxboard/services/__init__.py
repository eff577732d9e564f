# Services package init
"""
Voxboard Backend - Services Layer
==================================

What:  Business rules between the routes (HTTP) and the database / Google
       Cloud adapters.

Adapters (one external system each, abstract base + Google implementation):
    - SpeechSynthesizer / GoogleSpeechSynthesizer: text -> MP3 bytes
    - BlobStore / GCSBlobStore: upload, exists, delete, public URL
    - TextGenerator / GeminiService: topic -> generated text (with retries)

Domain services:
    - SoundboardService: validate -> synthesize -> upload -> persist
    - HistoryService: chat history headers and messages
    - ProfileService: profiles and profile pictures
    - FeedbackService, ReportService: append-only submissions

All of them are constructed in main.create_app() and reach the routes via
voxboard.dependencies, so tests can swap any adapter for a fake.
"""

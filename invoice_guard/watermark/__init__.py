"""
Invoice watermarking: code generation, marker embedding, extraction and
scoring.

`verify.verify_document` is the verification entrypoint; the generation
side lives in `invoice_guard.invoice`.
"""

"""
Vitrina Modules
===============

Each module is a Flask blueprint under /api:

- auth: admin sign-in, sign-out and session lookup
- projects, services, resources, testimonials: bilingual content
- uploads: file upload and download proxy
- analytics: dashboard numbers
"""

"""Setup (provisioning) services.

This package contains orchestration helpers that *provision* or *tear down*
cloud resources on behalf of API clients: static-site S3 buckets and
Lightsail instances. Each service runs one strictly ordered sequence of
awaited provider calls per request and reports failures as
:class:`~app.services.setup.errors.ProvisioningError` subclasses.

Existence checks are probe-then-act: two concurrent requests for the same
name can both pass the probe, and the provider decides which create wins.
There is no local locking; it could not hold across server processes anyway.
"""

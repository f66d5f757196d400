"""HTTP plumbing: rate-limit parsing, retry policy, envelopes and the executor."""

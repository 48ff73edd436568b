"""
One-way S3 deploy engine.

Provides :class:`DeploySyncService`, which reconciles a local build
directory against the objects in a bucket: new or changed files are
uploaded, unchanged ones skipped, and objects with no local counterpart
deleted.
"""
import json
import re
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from ...exceptions import HashMismatchDecode
from ...models.plan import ReconciliationPlan
from ...utils.logger import get_logger
from ...utils.persistence.file_utils import collect_local_files, hash_bytes, read_file
from .operations import S3Operations

log = get_logger(__name__)

_MD5_HEX = re.compile(r'^[0-9a-fA-F]{32}$')

SKIP = 'skip'
UPLOAD = 'upload'


def decode_etag(etag):
    """Unwrap an S3 ETag into a lowercase hex content hash.

    S3 returns the ETag as a JSON string (``'"9a0364b9..."'``). Only
    single-part uploads carry the plain MD5 of the body; anything else
    (multipart ``<hash>-<parts>`` tokens, missing or garbled values) is
    rejected.

    Args:
        etag: ETag exactly as listed

    Returns:
        Lowercase hex digest

    Raises:
        HashMismatchDecode: If the ETag is not a plain content hash
    """
    if not isinstance(etag, str) or not etag:
        raise HashMismatchDecode(f"Missing ETag: {etag!r}")

    value = etag.strip()
    if value.startswith('"'):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise HashMismatchDecode(f"Malformed ETag {etag!r}") from e
        if not isinstance(value, str):
            raise HashMismatchDecode(f"Malformed ETag {etag!r}")

    if not _MD5_HEX.match(value):
        raise HashMismatchDecode(f"ETag {etag!r} is not a content hash")
    return value.lower()


class DeploySyncService(S3Operations):
    """Deploys a local directory to an S3 bucket.

    Inherits the list/put/delete primitives from :class:`S3Operations`.
    The claim map shared by the upload workers is guarded by a lock.

    Args:
        s3_client: botocore S3 client
        bucket_name: Destination bucket name
        source_dir: Local root to upload from
        max_workers: Size of the hash/upload and delete pools
        ignore: Paths to ignore while walking
        honor_ignore: Skip ignored paths instead of only logging them
        dry_run: Decide and report, but never put or delete
    """

    def __init__(self, s3_client, bucket_name, source_dir, max_workers=16,
                 ignore=(), honor_ignore=False, dry_run=False):
        super().__init__(s3_client, bucket_name)
        self.source_dir = source_dir
        self.max_workers = max_workers
        self.ignore = set(ignore or ())
        self.honor_ignore = honor_ignore
        self.dry_run = dry_run
        self._claim_lock = threading.Lock()

    @classmethod
    def from_config(cls, s3_client, config):
        """Build a service from a validated configuration dictionary."""
        return cls(
            s3_client,
            config['bucket_name'],
            config['source_dir'],
            max_workers=config.get('max_workers', 16),
            ignore=config.get('ignore') or (),
            honor_ignore=config.get('honor_ignore', False),
            dry_run=config.get('dry_run', False),
        )

    # ── Concurrency helper ─────────────────────────────────────────────

    def _run_concurrently(self, func, items):
        """Apply *func* to every item on a bounded pool.

        The first failure cancels tasks that have not started yet and is
        re-raised once the running ones have finished.

        Returns:
            List of results, in completion order
        """
        if not items:
            return []

        results = []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            futures = [pool.submit(func, item) for item in items]
            try:
                for future in as_completed(futures):
                    results.append(future.result())
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
        return results

    # ── Phases ─────────────────────────────────────────────────────────

    def gather_listings(self):
        """List the bucket and walk the source directory concurrently.

        Returns:
            Tuple of (remote_objects, local_files)
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            remote_future = pool.submit(self.list_objects)
            local_future = pool.submit(
                collect_local_files, self.source_dir, self.ignore, self.honor_ignore
            )
            remote_objects = remote_future.result()
            local_files = local_future.result()

        log.debug(
            "%d remote object(s), %d local file(s)", len(remote_objects), len(local_files)
        )
        return remote_objects, local_files

    def _claim(self, remote_by_key, key):
        with self._claim_lock:
            remote_by_key.pop(key, None)

    def _remote_hash(self, remote_by_key, key):
        """Decoded hash of the remote object at *key*, or None if absent/unusable."""
        with self._claim_lock:
            remote = remote_by_key.get(key)
        if remote is None or remote.etag is None:
            return None
        try:
            return decode_etag(remote.etag)
        except HashMismatchDecode as e:
            log.debug("Re-uploading %s: %s", key, e)
            return None

    def process_file(self, local_file, remote_by_key):
        """Hash one local file, then skip or upload it.

        Returns:
            Tuple of (relative_path, action)
        """
        key = local_file.relative_path
        data = read_file(local_file.absolute_path)
        local_hash = hash_bytes(data)
        remote_hash = self._remote_hash(remote_by_key, key)

        if remote_hash == local_hash:
            log.info("Skipping: %s", key)
            self._claim(remote_by_key, key)
            return key, SKIP

        if self.dry_run:
            log.info("Would upload: %s", key)
            self._claim(remote_by_key, key)
            return key, UPLOAD

        log.info("Uploading: %s", key)
        self.put_object(key, data)
        log.info("Uploaded: %s", key)
        self._claim(remote_by_key, key)
        return key, UPLOAD

    def upload_changed(self, local_files, remote_by_key):
        """Run :meth:`process_file` for every local file.

        Returns:
            Tuple of (uploaded_keys, unchanged_keys)
        """
        results = self._run_concurrently(
            lambda local_file: self.process_file(local_file, remote_by_key),
            local_files,
        )
        uploaded = [key for key, action in results if action == UPLOAD]
        unchanged = [key for key, action in results if action == SKIP]
        return uploaded, unchanged

    def remove_object(self, key):
        """Delete one leftover object (logged, honours dry run)."""
        if self.dry_run:
            log.info("Would remove: %s", key)
            return key
        log.info("Removing: %s", key)
        self.delete_object(key)
        return key

    def delete_extra(self, keys):
        """Delete every key in *keys* on a bounded pool."""
        if not keys:
            return []

        log.info("Extra files on S3: %s", ", ".join(keys))
        log.info("Removing extra files.")
        return self._run_concurrently(self.remove_object, keys)

    # ── Main entry point ───────────────────────────────────────────────

    def sync(self):
        """Deploy the source directory to the bucket.

        Returns:
            :class:`ReconciliationPlan` of what was uploaded, skipped and deleted

        Raises:
            SyncError: The first fatal listing, filesystem, upload or delete error
        """
        remote_objects, local_files = self.gather_listings()

        log.info("Uploading...")
        remote_by_key = {obj.key: obj for obj in remote_objects}
        uploaded, unchanged = self.upload_changed(local_files, remote_by_key)
        log.info("Done uploading.")

        # Every upload decision is final here, whatever is unclaimed goes
        to_delete = sorted(remote_by_key)
        self.delete_extra(to_delete)

        log.info("Done.")
        return ReconciliationPlan(uploaded, unchanged, to_delete)

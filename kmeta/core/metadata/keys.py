from __future__ import annotations

from enum import Enum
from types import MappingProxyType

# When adding a label or annotation here, update the public
# labels/annotations documentation too.

# Labels
CLUSTER_LABEL_NAME = "cnpg.io/cluster"
JOB_ROLE_LABEL_NAME = "cnpg.io/jobRole"
PVC_ROLE_LABEL_NAME = "cnpg.io/pvcRole"
POD_ROLE_LABEL_NAME = "cnpg.io/podRole"
INSTANCE_NAME_LABEL_NAME = "cnpg.io/instanceName"
BACKUP_NAME_LABEL_NAME = "cnpg.io/backupName"

# Annotations
OPERATOR_VERSION_ANNOTATION_NAME = "cnpg.io/operatorVersion"

# Required on AKS, optional elsewhere. The full key is
# "<prefix>/<container name>" and the value is the profile name.
APPARMOR_ANNOTATION_PREFIX = "container.apparmor.security.beta.kubernetes.io"

RECONCILIATION_LOOP_ANNOTATION_NAME = "cnpg.io/reconciliationLoop"

# Deprecated, replaced by CLUSTER_MANIFEST_ANNOTATION_NAME
HIBERNATE_CLUSTER_MANIFEST_ANNOTATION_NAME = "cnpg.io/hibernateClusterManifest"

# Deprecated, replaced by PG_CONTROLDATA_ANNOTATION_NAME
HIBERNATE_PG_CONTROL_DATA_ANNOTATION_NAME = "cnpg.io/hibernatePgControlData"

# Deprecated, environment drift is covered by POD_SPEC_ANNOTATION_NAME
POD_ENV_HASH_ANNOTATION_NAME = "cnpg.io/podEnvHash"

POD_SPEC_ANNOTATION_NAME = "cnpg.io/podSpec"
CLUSTER_MANIFEST_ANNOTATION_NAME = "cnpg.io/clusterManifest"
PG_CONTROLDATA_ANNOTATION_NAME = "cnpg.io/pgControldata"

# Turns off the check that the WAL archive is empty before writing to it
SKIP_EMPTY_WAL_ARCHIVE_CHECK = "cnpg.io/skipEmptyWalArchiveCheck"


class AnnotationStatus(str, Enum):
    """Values accepted by on/off control annotations."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class PodRole(str, Enum):
    """Value of the pod role label."""

    INSTANCE = "instance"


class PVCRole(str, Enum):
    """Value of the PVC role label."""

    PG_DATA = "PG_DATA"
    PG_WAL = "PG_WAL"


WELL_KNOWN_LABELS = MappingProxyType(
    {
        "cluster": CLUSTER_LABEL_NAME,
        "job_role": JOB_ROLE_LABEL_NAME,
        "pvc_role": PVC_ROLE_LABEL_NAME,
        "pod_role": POD_ROLE_LABEL_NAME,
        "instance_name": INSTANCE_NAME_LABEL_NAME,
        "backup_name": BACKUP_NAME_LABEL_NAME,
    }
)

WELL_KNOWN_ANNOTATIONS = MappingProxyType(
    {
        "operator_version": OPERATOR_VERSION_ANNOTATION_NAME,
        "apparmor_prefix": APPARMOR_ANNOTATION_PREFIX,
        "reconciliation_loop": RECONCILIATION_LOOP_ANNOTATION_NAME,
        "hibernate_cluster_manifest": HIBERNATE_CLUSTER_MANIFEST_ANNOTATION_NAME,
        "hibernate_pg_control_data": HIBERNATE_PG_CONTROL_DATA_ANNOTATION_NAME,
        "pod_env_hash": POD_ENV_HASH_ANNOTATION_NAME,
        "pod_spec": POD_SPEC_ANNOTATION_NAME,
        "cluster_manifest": CLUSTER_MANIFEST_ANNOTATION_NAME,
        "pg_controldata": PG_CONTROLDATA_ANNOTATION_NAME,
        "skip_empty_wal_archive_check": SKIP_EMPTY_WAL_ARCHIVE_CHECK,
    }
)

"""Shared fakes for AWS clients used across the test suite."""

import base64
import copy
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

ACCOUNT_ID = "123456789012"
REGION = "us-east-1"
REGISTRY = f"{ACCOUNT_ID}.dkr.ecr.{REGION}.amazonaws.com"

SERVER_FIELDS = {
    "taskDefinitionArn",
    "revision",
    "status",
    "requiresAttributes",
    "placementConstraints",
    "compatibilities",
    "registeredAt",
    "registeredBy",
    "deregisteredAt",
}


def client_error(code: str, operation: str = "Operation") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def image_detail(tags: list[str] | None, minutes_ago: int) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "imageDigest": f"sha256:{minutes_ago:064d}",
        "imagePushedAt": datetime(2026, 1, 1, tzinfo=UTC) - timedelta(minutes=minutes_ago),
    }
    if tags is not None:
        detail["imageTags"] = tags
    return detail


class FakeEcr:
    """In-memory ECR repository."""

    def __init__(self, images: list[dict[str, Any]] | None = None) -> None:
        self.images = images or []

    def describe_images(self, repositoryName: str, imageIds: list[dict[str, str]]) -> dict:
        tag = imageIds[0]["imageTag"]
        matches = [image for image in self.images if tag in (image.get("imageTags") or [])]
        if not matches:
            raise client_error("ImageNotFoundException", "DescribeImages")
        return {"imageDetails": matches}

    def get_paginator(self, name: str) -> MagicMock:
        assert name == "describe_images"
        paginator = MagicMock()
        half = len(self.images) // 2
        paginator.paginate.return_value = [
            {"imageDetails": self.images[:half]},
            {"imageDetails": self.images[half:]},
        ]
        return paginator

    def get_authorization_token(self) -> dict:
        token = base64.b64encode(b"AWS:secret-password").decode("utf-8")
        return {
            "authorizationData": [
                {"authorizationToken": token, "proxyEndpoint": f"https://{REGISTRY}"}
            ]
        }


class FakeEcs:
    """In-memory ECS control plane holding one task family and one service."""

    def __init__(self, family: str = "bia-tf", image: str = f"{REGISTRY}/bia:old") -> None:
        self.family = family
        self.definitions: dict[str, dict[str, Any]] = {}
        self.registered: list[dict[str, Any]] = []
        self.update_error: ClientError | None = None
        self.waiter = MagicMock()
        self.service_task_definition = self._store(
            {
                "family": family,
                "networkMode": "awsvpc",
                "cpu": "256",
                "memory": "512",
                "containerDefinitions": [
                    {"name": "app", "image": image, "essential": True},
                    {"name": "sidecar", "image": "public.ecr.aws/nginx:latest"},
                ],
            }
        )

    def _store(self, document: dict[str, Any]) -> str:
        revision = len(self.definitions) + 1
        arn = f"arn:aws:ecs:{REGION}:{ACCOUNT_ID}:task-definition/{self.family}:{revision}"
        stored = copy.deepcopy(document)
        stored.update(
            {
                "taskDefinitionArn": arn,
                "revision": revision,
                "status": "ACTIVE",
                "requiresAttributes": [{"name": "ecs.capability.task-eni"}],
                "placementConstraints": [],
                "compatibilities": ["EC2", "FARGATE"],
                "registeredAt": datetime(2026, 1, 1, tzinfo=UTC),
                "registeredBy": f"arn:aws:iam::{ACCOUNT_ID}:user/ci",
            }
        )
        self.definitions[arn] = stored
        return arn

    def describe_task_definition(self, taskDefinition: str) -> dict:
        if taskDefinition in self.definitions:
            return {"taskDefinition": copy.deepcopy(self.definitions[taskDefinition])}
        if taskDefinition == self.family:
            latest = list(self.definitions.values())[-1]
            return {"taskDefinition": copy.deepcopy(latest)}
        raise client_error("ClientException", "DescribeTaskDefinition")

    def register_task_definition(self, **kwargs: Any) -> dict:
        leaked = SERVER_FIELDS & kwargs.keys()
        if leaked:
            raise client_error("ClientException", "RegisterTaskDefinition")
        self.registered.append(kwargs)
        arn = self._store(kwargs)
        return {"taskDefinition": {"taskDefinitionArn": arn}}

    def update_service(self, cluster: str, service: str, taskDefinition: str) -> dict:
        if self.update_error is not None:
            raise self.update_error
        self.service_task_definition = taskDefinition
        return {"service": {"serviceName": service}}

    def describe_services(self, cluster: str, services: list[str]) -> dict:
        return {
            "services": [
                {
                    "serviceName": services[0],
                    "taskDefinition": self.service_task_definition,
                    "runningCount": 2,
                    "desiredCount": 2,
                    "deployments": [{"status": "PRIMARY", "rolloutState": "COMPLETED"}],
                }
            ]
        }

    def get_waiter(self, name: str) -> MagicMock:
        assert name == "services_stable"
        return self.waiter

    def active_image(self, container_index: int = 0) -> str:
        definition = self.definitions[self.service_task_definition]
        return str(definition["containerDefinitions"][container_index]["image"])


class FakeSts:
    def get_caller_identity(self) -> dict:
        return {
            "Account": ACCOUNT_ID,
            "Arn": f"arn:aws:iam::{ACCOUNT_ID}:user/ci",
            "UserId": "AIDEXAMPLE",
        }


class FakeSession:
    """Stand-in for boto3.session.Session returning in-memory clients."""

    def __init__(self, ecr: FakeEcr, ecs: FakeEcs) -> None:
        self.clients = {"ecr": ecr, "ecs": ecs, "sts": FakeSts()}

    def client(self, name: str) -> Any:
        return self.clients[name]


@pytest.fixture
def ecr() -> FakeEcr:
    return FakeEcr(
        [
            image_detail(["a1b2c3d4", "latest"], minutes_ago=1),
            image_detail(["0f9e8d7c"], minutes_ago=60),
        ]
    )


@pytest.fixture
def ecs() -> FakeEcs:
    return FakeEcs()


@pytest.fixture
def session(ecr: FakeEcr, ecs: FakeEcs) -> FakeSession:
    return FakeSession(ecr, ecs)

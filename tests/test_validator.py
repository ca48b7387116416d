"""Tests for process validation."""

import os

import psutil
import pytest

from check_jstat import validator as validator_module
from check_jstat.errors import NotJavaProcess, ProcessNotFound
from check_jstat.validator import (
    PermissiveValidator,
    ProcessOutcome,
    PsutilValidator,
    default_validator,
)


class RaisingProcess:
    """Stand-in for psutil.Process whose name() raises."""

    error: Exception = psutil.AccessDenied(0)

    def __init__(self, pid=None):
        self.pid = pid

    def name(self):
        raise self.error


class TestPsutilValidator:
    """Tests for PsutilValidator against real and patched processes."""

    def test_own_process_matches_its_name(self):
        own_name = psutil.Process().name()
        validator = PsutilValidator(expected_name=own_name)

        outcome = validator.validate(os.getpid())

        assert outcome == ProcessOutcome(pid=os.getpid(), alive=True, is_java=True, name=own_name)

    def test_non_java_process(self):
        validator = PsutilValidator()

        with pytest.raises(NotJavaProcess) as excinfo:
            validator.validate(os.getpid())

        assert "seems not to be a JAVA application" in str(excinfo.value)
        assert excinfo.value.name == psutil.Process().name()

    def test_missing_process(self, monkeypatch):
        monkeypatch.setattr(psutil, "pid_exists", lambda pid: False)

        with pytest.raises(ProcessNotFound, match=r"process pid\[99999\] not found"):
            PsutilValidator().validate(99999)

    def test_access_denied_skips_name_check(self, monkeypatch):
        monkeypatch.setattr(psutil, "pid_exists", lambda pid: True)
        monkeypatch.setattr(psutil, "Process", RaisingProcess)

        outcome = PsutilValidator().validate(1)

        assert outcome.alive is True
        assert outcome.is_java is True
        assert outcome.name is None

    def test_zombie_skips_name_check(self, monkeypatch):
        monkeypatch.setattr(psutil, "pid_exists", lambda pid: True)
        monkeypatch.setattr(RaisingProcess, "error", psutil.ZombieProcess(1))
        monkeypatch.setattr(psutil, "Process", RaisingProcess)

        assert PsutilValidator().validate(1).is_java is True

    def test_process_exits_during_check(self, monkeypatch):
        monkeypatch.setattr(psutil, "pid_exists", lambda pid: True)
        monkeypatch.setattr(RaisingProcess, "error", psutil.NoSuchProcess(1))
        monkeypatch.setattr(psutil, "Process", RaisingProcess)

        with pytest.raises(ProcessNotFound):
            PsutilValidator().validate(1)

    @pytest.mark.parametrize("name", ["java.exe", "java.EXE", "javaw.exe", "javaw"])
    def test_windows_launcher_names(self, name, monkeypatch):
        class NamedProcess:
            def __init__(self, pid=None):
                self.pid = pid

            def name(self):
                return name

        monkeypatch.setattr(psutil, "pid_exists", lambda pid: True)
        monkeypatch.setattr(psutil, "Process", NamedProcess)

        outcome = PsutilValidator().validate(4242)

        assert outcome.is_java is True
        assert outcome.name == name

    def test_other_executable_is_not_java(self, monkeypatch):
        class NamedProcess:
            def __init__(self, pid=None):
                self.pid = pid

            def name(self):
                return "python.exe"

        monkeypatch.setattr(psutil, "pid_exists", lambda pid: True)
        monkeypatch.setattr(psutil, "Process", NamedProcess)

        with pytest.raises(NotJavaProcess):
            PsutilValidator().validate(4242)

    def test_expected_name_property(self):
        assert PsutilValidator().expected_name == "java"
        assert PsutilValidator("jsvc").expected_name == "jsvc"


def test_permissive_validator_accepts_anything():
    """Test PermissiveValidator passes every pid."""
    outcome = PermissiveValidator().validate(123456)

    assert outcome.alive is True
    assert outcome.is_java is True


def test_default_validator_uses_psutil():
    """Test the default validator is psutil based where introspection works."""
    validator = default_validator("java")

    assert isinstance(validator, PsutilValidator)
    assert validator.expected_name == "java"


def test_default_validator_without_introspection(monkeypatch):
    """Test the default validator degrades when process names are unreadable."""
    monkeypatch.setattr(validator_module.psutil, "Process", RaisingProcess)

    assert isinstance(default_validator(), PermissiveValidator)

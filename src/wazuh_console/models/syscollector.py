"""Syscollector inventory models (hardware, processes, packages)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class HardwareCpu(BaseModel):
    cores: int = 0
    mhz: float = 0.0
    name: str = ""


class HardwareRam(BaseModel):
    free: int = 0
    total: int = 0
    usage: int = 0


class HardwareScan(BaseModel):
    id: int | None = None
    time: str | None = None


class HardwareItem(BaseModel):
    """Hardware inventory of one agent."""

    cpu: HardwareCpu
    ram: HardwareRam
    scan: HardwareScan | None = None
    board_serial: str | None = None
    agent_id: str


class ProcessItem(BaseModel):
    """A running process."""

    # The manager reports pid as a string on some versions and a number on others
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    cmd: str | None = None
    pid: str
    state: str | None = None
    agent_id: str


class ProgramItem(BaseModel):
    """An installed package."""

    name: str
    version: str = ""
    vendor: str | None = None
    description: str | None = None
    agent_id: str

"""Tests for syntax node construction."""

import pytest

from shellexec.ast import (
    CommandNode,
    ParamsNode,
    PipelineNode,
    build_command,
    build_params,
    build_pipeline,
    iter_params,
    new_command,
    new_param,
    new_params,
    new_pipe,
)


class TestConstructors:
    """Test the per-variant constructors."""

    def test_new_command_without_params(self):
        node = new_command("ls")
        assert node.type == "Command"
        assert node.name == "ls"
        assert node.params is None

    def test_new_command_takes_params(self):
        params = new_params(new_param("-l"))
        node = new_command("ls", params)
        assert node.params is params

    def test_new_param(self):
        node = new_param("/tmp")
        assert node.type == "Param"
        assert node.value == "/tmp"

    def test_new_params_links_chain(self):
        tail = new_params(new_param("b"))
        head = new_params(new_param("a"), tail)
        assert head.type == "Params"
        assert head.first.value == "a"
        assert head.second is tail
        assert tail.second is None

    def test_new_pipe(self):
        left = new_command("ls")
        node = new_pipe(left)
        assert node.type == "Pipeline"
        assert node.command is left
        assert node.pipe is None

    def test_new_pipe_rejects_missing_stage(self):
        with pytest.raises(ValueError):
            new_pipe(None)


class TestBuilders:
    """Test building chains from flat sequences."""

    def test_build_params_empty(self):
        assert build_params([]) is None

    def test_build_params_keeps_order(self):
        chain = build_params(["-l", "-a", "/tmp"])
        assert isinstance(chain, ParamsNode)
        assert list(iter_params(chain)) == ["-l", "-a", "/tmp"]

    def test_build_params_is_right_extending(self):
        chain = build_params(["a", "b"])
        assert chain.first.type == "Param"
        assert chain.second.type == "Params"
        assert chain.second.second is None

    def test_build_command(self):
        node = build_command("ls", ["-l", "/tmp"])
        assert isinstance(node, CommandNode)
        assert list(iter_params(node.params)) == ["-l", "/tmp"]

    def test_build_pipeline_single_stage(self):
        node = build_pipeline([build_command("ls")])
        assert isinstance(node, PipelineNode)
        assert node.command.name == "ls"
        assert node.pipe is None

    def test_build_pipeline_chains_right(self):
        node = build_pipeline([build_command("a"), build_command("b"), build_command("c")])
        assert node.command.name == "a"
        assert node.pipe.command.name == "b"
        assert node.pipe.pipe.command.name == "c"
        assert node.pipe.pipe.pipe is None

    def test_build_pipeline_empty(self):
        with pytest.raises(ValueError):
            build_pipeline([])


class TestIterParams:
    """Test walking argument chains."""

    def test_absent_chain(self):
        assert list(iter_params(None)) == []

    def test_single_link(self):
        assert list(iter_params(new_params(new_param("x")))) == ["x"]

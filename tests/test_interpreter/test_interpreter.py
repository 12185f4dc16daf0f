"""Tests for the interpreter."""

import asyncio
import errno
from types import SimpleNamespace

import pytest

from shellexec.ast import build_command, build_params, build_pipeline, new_param, new_params, new_pipe
from shellexec.ast.types import ParamsNode
from shellexec.interpreter import ArgumentCountMismatch, ExecutionContext, Interpreter
from shellexec.types import STATUS_INVALID_NODE, STATUS_RESOURCE_ERROR


class TestCommands:
    """Test single command evaluation."""

    @pytest.mark.asyncio
    async def test_empty_line(self):
        result = await Interpreter().execute_node(None)
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_true_command(self):
        result = await Interpreter().execute_node(build_command("true"))
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_exit_code_unchanged(self):
        result = await Interpreter().execute_node(build_command("sh", ["-c", "exit 5"]))
        assert result.exit_code == 5
        assert result.pipestatus == [5]

    @pytest.mark.asyncio
    async def test_arguments_reach_the_child(self, stdout_capture):
        interpreter = Interpreter(ExecutionContext(stdout=stdout_capture.fd))
        result = await interpreter.execute_node(build_command("echo", ["-n", "a", "b"]))
        assert result.exit_code == 0
        assert stdout_capture.read() == "a b"

    @pytest.mark.asyncio
    async def test_command_not_found(self, stderr_capture):
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        result = await interpreter.execute_node(build_command("foo-not-a-command"))
        assert result.exit_code == 1
        assert "foo-not-a-command" in stderr_capture.read()

        # The shell keeps working afterwards
        result = await interpreter.execute_node(build_command("true"))
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_tree_is_left_intact(self):
        node = build_command("true", ["x", "y"])
        await Interpreter().execute_node(node)
        assert not node.released
        assert node.params.first.value == "x"


class TestPipelines:
    """Test pipeline dispatch."""

    @pytest.mark.asyncio
    async def test_simple_pipeline(self, stdout_capture):
        interpreter = Interpreter(ExecutionContext(stdout=stdout_capture.fd))
        root = build_pipeline([build_command("echo", ["hello"]), build_command("cat")])
        result = await interpreter.execute_node(root)
        assert result.exit_code == 0
        assert stdout_capture.read() == "hello\n"

    @pytest.mark.asyncio
    async def test_pipeline_exit_code(self):
        root = build_pipeline([build_command("true"), build_command("false")])
        result = await Interpreter().execute_node(root)
        assert result.exit_code == 1

    @pytest.mark.asyncio
    async def test_invalid_stage(self, stderr_capture):
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        root = new_pipe(build_command("true"), new_pipe(new_params(new_param("x"))))
        result = await interpreter.execute_node(root)
        assert result.exit_code == STATUS_INVALID_NODE
        assert "invalid pipeline stage" in stderr_capture.read()


class TestDispatchErrors:
    """Test roots that cannot be evaluated."""

    @pytest.mark.asyncio
    async def test_param_root(self, stderr_capture):
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        result = await interpreter.execute_node(new_param("ls"))
        assert result.exit_code == STATUS_INVALID_NODE
        assert "Param" in stderr_capture.read()

    @pytest.mark.asyncio
    async def test_params_root(self, stderr_capture):
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        result = await interpreter.execute_node(build_params(["a"]))
        assert result.exit_code == STATUS_INVALID_NODE

    @pytest.mark.asyncio
    async def test_unknown_root(self, stderr_capture):
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        result = await interpreter.execute_node(SimpleNamespace(type="Bogus"))
        assert result.exit_code == STATUS_INVALID_NODE

    @pytest.mark.asyncio
    async def test_resource_error(self, monkeypatch, stderr_capture):
        async def refuse(*args, **kwargs):
            raise OSError(errno.ENOMEM, "Cannot allocate memory")

        monkeypatch.setattr(asyncio, "create_subprocess_exec", refuse)
        interpreter = Interpreter(ExecutionContext(stderr=stderr_capture.fd))
        result = await interpreter.execute_node(build_command("true"))
        assert result.exit_code == STATUS_RESOURCE_ERROR
        assert "cannot create process" in stderr_capture.read()

    @pytest.mark.asyncio
    async def test_argument_mismatch_propagates(self):
        node = build_command("echo")
        node.params = new_params(new_param("a"), ParamsNode(first=None))
        with pytest.raises(ArgumentCountMismatch):
            await Interpreter().execute_node(node)


class TestBuiltins:
    """Test builtin interception."""

    @pytest.mark.asyncio
    async def test_builtin_runs_in_process(self):
        calls = []

        def fake_cd(argv):
            calls.append(argv)
            return 0

        interpreter = Interpreter(ExecutionContext(builtins={"cd": fake_cd}))
        result = await interpreter.execute_node(build_command("cd", ["/tmp"]))
        assert result.exit_code == 0
        assert calls == [["cd", "/tmp"]]

    @pytest.mark.asyncio
    async def test_builtin_status(self):
        interpreter = Interpreter(ExecutionContext(builtins={"bye": lambda argv: 3}))
        result = await interpreter.execute_node(build_command("bye"))
        assert result.exit_code == 3

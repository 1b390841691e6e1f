import pytest

from kubefire.commands import CommandRenderer
from kubefire.errors import TemplateError
from kubefire.models import NodeSpec


@pytest.fixture
def renderer():
    return CommandRenderer()


class TestCreate:
    def test_create_arguments(self, renderer):
        spec = NodeSpec(cluster="c1", image="img", node_type="worker", count=1,
                        cpus=2, memory="2GB", disk_size="10GB")
        inv = renderer.create(spec, "c1-worker-1")

        assert inv.executable == "ignite"
        assert inv.args == (
            "run", "img", "--name=c1-worker-1", "--ssh",
            "--cpus=2", "--memory=2GB", "--size=10GB",
        )

    def test_render_is_stable(self, renderer):
        spec = NodeSpec(cluster="c1", image="img", cpus=2, memory="2GB", disk_size="10GB")
        assert renderer.create(spec, "c1-worker-1") == renderer.create(spec, "c1-worker-1")

    def test_kernel_options_are_single_arguments(self, renderer):
        spec = NodeSpec(cluster="c1", image="img", kernel_image="kernel:5.4",
                        kernel_args="console=ttyS0 reboot=k panic=1")
        args = renderer.create(spec, "c1-worker-1").args

        assert "--kernel-image=kernel:5.4" in args
        assert "--kernel-args=console=ttyS0 reboot=k panic=1" in args
        assert args.index("--kernel-image=kernel:5.4") < args.index("--cpus=1")

    def test_whitespace_in_value_is_rejected(self, renderer):
        spec = NodeSpec(cluster="c1", image="img", memory="2 GB")
        with pytest.raises(TemplateError):
            renderer.create(spec, "c1-worker-1")

    def test_control_characters_are_rejected(self, renderer):
        spec = NodeSpec(cluster="c1", image="img", kernel_args="quiet\nroot=/dev/vda")
        with pytest.raises(TemplateError):
            renderer.create(spec, "c1-worker-1")


class TestQueries:
    def test_delete_is_forced(self, renderer):
        assert renderer.delete("c1-worker-1").args == ("rm", "c1-worker-1", "--force")

    def test_presence(self, renderer):
        assert renderer.presence("n1").args == (
            "ps", "--all", "-f", "{{.ObjectMeta.Name}}=n1", "-t", "{{.ObjectMeta.Name}}")

    def test_field(self, renderer):
        assert renderer.field("n1", "{{.Spec.CPUs}}").args == (
            "ps", "--all", "-f", "{{.ObjectMeta.Name}}=n1", "-t", "{{.Spec.CPUs}}")

    def test_list_unfiltered(self, renderer):
        assert renderer.list().args == ("ps", "--all", "-t", "{{.ObjectMeta.Name}}")

    def test_list_filtered(self, renderer):
        assert renderer.list("web").args == (
            "ps", "--all", "-f", "{{.ObjectMeta.Name}}=~web", "-t", "{{.ObjectMeta.Name}}")

    def test_custom_executable(self):
        assert CommandRenderer("/usr/local/bin/ignite").delete("n").executable == "/usr/local/bin/ignite"


class TestTemplateErrors:
    def test_unknown_template(self, renderer):
        with pytest.raises(TemplateError, match="Unknown"):
            renderer.render("reboot", name="n")

    def test_missing_parameter(self, renderer):
        with pytest.raises(TemplateError, match="missing parameter 'name'"):
            renderer.render("delete")

    def test_empty_parameter_counts_as_missing(self, renderer):
        with pytest.raises(TemplateError):
            renderer.delete("")

    def test_malformed_template(self):
        renderer = CommandRenderer(templates={"broken": ("rm", "$")})
        with pytest.raises(TemplateError, match="malformed"):
            renderer.render("broken")

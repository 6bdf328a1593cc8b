from fdclosure import ClosureConfig, ClosureRunner, closure, holds_in, parse_fd, parse_fds


def main() -> None:
    fds = parse_fds(["emp_id -> dept", "dept -> manager"])
    runner = ClosureRunner(ClosureConfig(verbose=True))
    result = runner.run(fds)
    print(result.render(show_trivial=False))

    closed = closure(fds)
    question = parse_fd("emp_id -> manager")
    print(f"{question} holds:", holds_in(closed, question))


if __name__ == "__main__":
    main()

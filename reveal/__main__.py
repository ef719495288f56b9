from reveal.cli import main

main(prog_name="reveal")

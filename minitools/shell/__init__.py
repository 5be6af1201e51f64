"""A toy command shell: line tokenizer, pipeline runner, job table and command loop."""
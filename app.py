from corn_eda.run_eda import main


if __name__ == "__main__":
	# Lets the full EDA run be started with `python app.py --root <dataset>`.
	main()
